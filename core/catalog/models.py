"""
tabula - Scaffold List Rendering for Django
Copyright © 2025 The tabula Authors

This file is part of tabula.

tabula is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as
published by the Free Software Foundation, either version 3 of
the License, or (at your option) any later version.

tabula is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with tabula. If not, see <https://www.gnu.org/licenses/>.
"""

from django.db import models

from scaffold.constants import CRUD_PERMISSION_VERBS, CRUD_UPDATE


# -------------------------------------------------------------------
# Publisher
# -------------------------------------------------------------------
class Publisher(models.Model):
  name = models.CharField(max_length=100, unique=True)

  class Meta:
    ordering = ["name"]
    verbose_name_plural = "Publishers"

  def __str__(self):
    return self.name


# -------------------------------------------------------------------
# Author
# -------------------------------------------------------------------
class Author(models.Model):
  name = models.CharField(max_length=200)
  email = models.EmailField(blank=True)
  active = models.BooleanField(default=True)
  born_on = models.DateField(null=True, blank=True)
  bio = models.TextField(blank=True)

  class Meta:
    ordering = ["name"]
    verbose_name_plural = "Authors"

  def __str__(self):
    return self.name


# -------------------------------------------------------------------
# Profile (one per author)
# -------------------------------------------------------------------
class Profile(models.Model):
  author = models.OneToOneField(Author, on_delete=models.CASCADE, related_name="profile")
  website = models.URLField(blank=True)

  class Meta:
    verbose_name_plural = "Profiles"

  def __str__(self):
    return self.website or f"Profile of {self.author}"


# -------------------------------------------------------------------
# Tag
# -------------------------------------------------------------------
class Tag(models.Model):
  name = models.CharField(max_length=50, unique=True)

  class Meta:
    ordering = ["name"]
    verbose_name_plural = "Tags"

  def __str__(self):
    return self.name


# -------------------------------------------------------------------
# Book
# -------------------------------------------------------------------
class Book(models.Model):
  title = models.CharField(max_length=200)
  author = models.ForeignKey(Author, null=True, blank=True, on_delete=models.SET_NULL, related_name="books")
  publisher = models.ForeignKey(Publisher, null=True, blank=True, on_delete=models.SET_NULL, related_name="books")
  tags = models.ManyToManyField(Tag, blank=True, related_name="books")
  in_print = models.BooleanField(default=True)
  released_at = models.DateTimeField(null=True, blank=True)
  summary = models.TextField(blank=True)
  locked = models.BooleanField(default=False,
    help_text="Locked books cannot be edited in the list."
  )

  class Meta:
    ordering = ["title"]
    verbose_name_plural = "Books"

  def __str__(self):
    return self.title

  def to_label(self):
    return f"«{self.title}»"

  def authorized_for(self, user, action, column=None):
    if self.locked and action == CRUD_UPDATE:
      return False
    opts = self._meta
    verb = CRUD_PERMISSION_VERBS.get(action)
    return verb is not None and user.has_perm(f"{opts.app_label}.{verb}_{opts.model_name}")
