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

from django.utils.translation import gettext_lazy as _

# ------------------------------------------------------------
# CRUD kinds (used for links and authorization)
# ------------------------------------------------------------
CRUD_CREATE = "create"
CRUD_READ = "read"
CRUD_UPDATE = "update"
CRUD_DELETE = "delete"

CRUD_TYPES = (CRUD_CREATE, CRUD_READ, CRUD_UPDATE, CRUD_DELETE)

# Django permission codename prefix per CRUD kind
CRUD_PERMISSION_VERBS = {
  CRUD_CREATE: "add",
  CRUD_READ: "view",
  CRUD_UPDATE: "change",
  CRUD_DELETE: "delete",
}

# ------------------------------------------------------------
# Association macros
# ------------------------------------------------------------
HAS_ONE = "has_one"
BELONGS_TO = "belongs_to"
HAS_MANY = "has_many"
HAS_AND_BELONGS_TO_MANY = "has_and_belongs_to_many"

SINGULAR_MACROS = frozenset({HAS_ONE, BELONGS_TO})
PLURAL_MACROS = frozenset({HAS_MANY, HAS_AND_BELONGS_TO_MANY})

# Actions an automatic association link may point to
ASSOCIATION_LINK_ACTIONS = ("new", "edit", "show")

# ------------------------------------------------------------
# Rendering defaults
# ------------------------------------------------------------
# Empty table cells must keep their height and borders.
EMPTY_CELL = "&nbsp;"
TRUNCATION_MARKER = "…"

DEFAULT_EMPTY_FIELD_TEXT = "-"
DEFAULT_TRUNCATE_LENGTH = 50
DEFAULT_ASSOCIATED_LIMIT = 3

INPLACE_EDITOR_FIELD_CLASS = "in_place_editor_field"
INPLACE_EDIT_CONTROL_CLASS = "as_inplace_pattern"
INPLACE_EDITOR_JS_CLASS = "ScaffoldInPlaceEditor"

UPDATE_COLUMN_ACTION = "update_column"

# Django internal field type -> list column type
FIELD_TYPE_MAP = {
  "CharField": "string",
  "SlugField": "string",
  "EmailField": "string",
  "URLField": "string",
  "UUIDField": "string",
  "TextField": "text",
  "BooleanField": "boolean",
  "NullBooleanField": "boolean",
  "DateField": "date",
  "DateTimeField": "datetime",
  "TimeField": "time",
  "IntegerField": "integer",
  "BigIntegerField": "integer",
  "SmallIntegerField": "integer",
  "PositiveIntegerField": "integer",
  "PositiveSmallIntegerField": "integer",
  "PositiveBigIntegerField": "integer",
  "AutoField": "integer",
  "BigAutoField": "integer",
  "DecimalField": "decimal",
  "FloatField": "float",
}

# Translatable UI tokens
UI_TEXT = {
  "true": _("Yes"),
  "false": _("No"),
  "create_new": _("Create New"),
  "click_to_edit": _("Click to edit"),
  "cancel": _("Cancel"),
  "loading": _("Loading…"),
  "update": _("Update"),
  "saving": _("Saving…"),
}
