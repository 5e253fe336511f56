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

import datetime

import pytest
from django.contrib.auth.models import AnonymousUser, Permission
from django.utils import timezone

from catalog.models import Author, Book, Profile, Publisher, Tag
from scaffold.authorization import AllowAllAuthorizer, Authorizer
from scaffold.config import build_list_config
from scaffold.list_columns import ListColumnHelper


class RuleAuthorizer(Authorizer):
  """
  Allows everything except denied rules and records every check.

  Rules are (model name, action) or (model name, action, column).
  """

  def __init__(self, denied=()):
    self.denied = set(denied)
    self.calls = []

  def authorized(self, subject, action, column=None):
    self.calls.append((subject, action, column))
    model = subject if isinstance(subject, type) else type(subject)
    if (model.__name__, action) in self.denied:
      return False
    if column is not None and (model.__name__, action, column) in self.denied:
      return False
    return True


@pytest.fixture
def make_helper(rf):
  """Factory: helper for a config, optional authorizer and query params."""
  def _make(config, authorizer=None, **params):
    request = rf.get("/", params)
    request.user = AnonymousUser()
    return ListColumnHelper(config, request, authorizer=authorizer or AllowAllAuthorizer())
  return _make


@pytest.fixture
def book_config():
  return build_list_config(
    Book,
    columns=["title", "author", "publisher", "tags", "in_print", "released_at", "summary"],
    column_options={
      "title": {"inplace_edit": True, "options": {"size": 40}},
      "author": {"inplace_edit": True},
      "in_print": {"list_ui": "checkbox", "inplace_edit": True},
    },
  )


@pytest.fixture
def catalog(db):
  """
  Small catalog:

    jane (with profile) wrote "Dune" (5 tags) and "Emma" (no tags)
    bob has no books and no profile
    "Orphan" has neither author nor publisher
  """
  acme = Publisher.objects.create(name="Acme")
  jane = Author.objects.create(name="Jane Doe", email="jane@example.com", born_on=datetime.date(1970, 1, 2))
  bob = Author.objects.create(name="Bob", active=False)
  Profile.objects.create(author=jane, website="https://jane.example.com")

  tags = [Tag.objects.create(name=n) for n in ("gamma", "alpha", "epsilon", "beta", "delta")]

  dune = Book.objects.create(
    title="Dune", author=jane, publisher=acme,
    released_at=timezone.make_aware(datetime.datetime(2024, 3, 5, 14, 30), datetime.timezone.utc),
  )
  dune.tags.set(tags)
  emma = Book.objects.create(title="Emma", author=jane, in_print=False)
  orphan = Book.objects.create(title="Orphan")

  return {
    "acme": acme, "jane": jane, "bob": bob, "tags": tags,
    "dune": dune, "emma": emma, "orphan": orphan,
  }


@pytest.fixture
def editor(db, django_user_model):
  """Logged-in capable user with catalog change/view/add permissions."""
  user = django_user_model.objects.create_user(username="editor", password="p")
  codenames = [
    f"{verb}_{model}"
    for verb in ("view", "add", "change")
    for model in ("book", "author", "publisher", "tag", "profile")
  ]
  user.user_permissions.add(*Permission.objects.filter(content_type__app_label="catalog", codename__in=codenames))
  return django_user_model.objects.get(pk=user.pk)


@pytest.fixture
def rule_authorizer():
  return RuleAuthorizer
