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

from django.urls import path
from django.utils.text import slugify

from scaffold.constants import UPDATE_COLUMN_ACTION


def scaffold_urlpatterns(view_cls, segment=None):
  """
  Routes of one scaffold view, named "<controller>_<action>".

  The names are what url_for() reverses when rendering links and the
  in-place editor.
  """
  config = view_cls().get_list_config()
  controller = config.controller
  seg = (segment or slugify(config.model._meta.verbose_name_plural)).strip("/")

  return [
    path(f"{seg}/", view_cls.as_view(action="list"), name=f"{controller}_list"),
    path(f"{seg}/new/", view_cls.as_view(action="new"), name=f"{controller}_new"),
    path(f"{seg}/{UPDATE_COLUMN_ACTION}/", view_cls.as_view(action=UPDATE_COLUMN_ACTION),
      name=f"{controller}_{UPDATE_COLUMN_ACTION}"),
    path(f"{seg}/<int:pk>/", view_cls.as_view(action="show"), name=f"{controller}_show"),
    path(f"{seg}/<int:pk>/edit/", view_cls.as_view(action="edit"), name=f"{controller}_edit"),
    path(f"{seg}/<int:pk>/row/", view_cls.as_view(action="row"), name=f"{controller}_row"),
  ]
