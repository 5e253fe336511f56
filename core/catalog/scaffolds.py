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

from django.utils.html import format_html

from catalog.models import Author, Book, Profile, Publisher, Tag
from scaffold.config import build_list_config
from scaffold.overrides import register_column_override

# ------------------------------------------------------------
# Column overrides (register before building the configs)
# ------------------------------------------------------------
@register_column_override("author", "email")
def author_email_column(helper, record):
  if not record.email:
    return None
  return format_html('<a href="mailto:{0}">{0}</a>', record.email)


# ------------------------------------------------------------
# List configurations
# ------------------------------------------------------------
AUTHOR_LIST = build_list_config(
  Author,
  columns=["name", "email", "active", "born_on", "bio", "books", "profile"],
  column_options={
    "name": {"inplace_edit": True},
    "active": {"list_ui": "checkbox", "inplace_edit": True},
    "books": {"associated_limit": 2, "select_columns": ("title",)},
    "bio": {"options": {"truncate": 40}},
  },
)

BOOK_LIST = build_list_config(
  Book,
  columns=["title", "author", "publisher", "tags", "in_print", "released_at"],
  column_options={
    "title": {"inplace_edit": True, "options": {"size": 40}},
    "author": {"inplace_edit": True, "actions_for_association_links": {"edit", "show"}},
    "publisher": {"actions_for_association_links": {"new", "show"}},
    "tags": {"associated_limit": 3},
    "in_print": {"list_ui": "checkbox", "inplace_edit": True},
    "released_at": {"options": {"format": "Y-m-d H:i"}},
  },
)

PROFILE_LIST = build_list_config(Profile, columns=["author", "website"])

PUBLISHER_LIST = build_list_config(Publisher, columns=["name", "books"])

TAG_LIST = build_list_config(Tag, columns=["name", "books"], column_options={"books": {"associated_limit": 0}})
