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

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from scaffold.constants import (
  ASSOCIATION_LINK_ACTIONS, BELONGS_TO, CRUD_READ, DEFAULT_ASSOCIATED_LIMIT,
  DEFAULT_EMPTY_FIELD_TEXT, DEFAULT_TRUNCATE_LENGTH, FIELD_TYPE_MAP,
  HAS_AND_BELONGS_TO_MANY, HAS_MANY, HAS_ONE, PLURAL_MACROS, SINGULAR_MACROS,
)
from scaffold.overrides import registry as default_registry


def scaffold_settings() -> dict:
  """Return settings.TABULA_CRUD["scaffold"] (empty dict if not configured)."""
  return getattr(settings, "TABULA_CRUD", {}).get("scaffold", {})


# ------------------------------------------------------------
# Descriptors
# ------------------------------------------------------------
@dataclass(frozen=True)
class ActionLink:
  """Target of a list cell link. Derive a copy instead of mutating."""
  action: Optional[str] = None
  controller: Optional[str] = None
  crud_type: Optional[str] = CRUD_READ
  label: str = ""
  parameters: Mapping = field(default_factory=dict)
  html_options: Mapping = field(default_factory=dict)

  def __post_init__(self):
    object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))
    object.__setattr__(self, "html_options", MappingProxyType(dict(self.html_options)))

  def derive(self, **changes) -> "ActionLink":
    return replace(self, **changes)


@dataclass(frozen=True)
class Association:
  name: str
  macro: str
  model: type

  @property
  def singular(self) -> bool:
    return self.macro in SINGULAR_MACROS

  @property
  def plural(self) -> bool:
    return self.macro in PLURAL_MACROS

  @classmethod
  def from_field(cls, model_field) -> Optional["Association"]:
    """
    Map a Django relation (forward or reverse) to an association.

    - ForeignKey / OneToOneField  -> belongs_to
    - reverse OneToOneField       -> has_one
    - reverse ForeignKey          -> has_many
    - ManyToManyField (any side)  -> has_and_belongs_to_many
    """
    if not getattr(model_field, "is_relation", False) or model_field.related_model is None:
      return None

    reverse = model_field.auto_created and not model_field.concrete
    name = model_field.get_accessor_name() if reverse else model_field.name

    if model_field.many_to_many:
      macro = HAS_AND_BELONGS_TO_MANY
    elif model_field.one_to_many:
      macro = HAS_MANY
    elif model_field.one_to_one and reverse:
      macro = HAS_ONE
    else:
      macro = BELONGS_TO

    return cls(name=name, macro=macro, model=model_field.related_model)


@dataclass(frozen=True)
class Column:
  """
  One list column of a scaffold.

  Columns are shared by every request rendering the list; use derive() or
  without_option() to get a locally changed copy.
  """
  name: str
  label: str = ""
  list_ui: Optional[str] = None
  form_ui: Optional[str] = None
  field_type: Optional[str] = None
  association: Optional[Association] = None
  link: Optional[ActionLink] = None
  inplace_edit: bool = False
  options: Mapping = field(default_factory=dict)
  associated_limit: Optional[int] = DEFAULT_ASSOCIATED_LIMIT
  associated_number: bool = True
  actions_for_association_links: frozenset = frozenset(ASSOCIATION_LINK_ACTIONS)
  select_columns: Optional[tuple] = None
  override: Optional[Callable] = None
  list_ui_override: Optional[Callable] = None
  field_type_override: Optional[Callable] = None

  def __post_init__(self):
    object.__setattr__(self, "options", MappingProxyType(dict(self.options)))
    object.__setattr__(self, "actions_for_association_links", frozenset(self.actions_for_association_links))

  @property
  def singular_association(self) -> bool:
    return self.association is not None and self.association.singular

  @property
  def plural_association(self) -> bool:
    return self.association is not None and self.association.plural

  @property
  def autolink(self) -> bool:
    # links without an explicit action are inferred per record
    return self.link is not None and self.link.action is None

  @property
  def override_name(self) -> str:
    return self.name.replace("?", "")

  def derive(self, **changes) -> "Column":
    return replace(self, **changes)

  def without_option(self, key) -> "Column":
    options = dict(self.options)
    options.pop(key, None)
    return replace(self, options=options)


@dataclass(frozen=True)
class ListConfig:
  controller: str
  model: type
  columns: tuple
  empty_field_text: str = DEFAULT_EMPTY_FIELD_TEXT
  date_format: Optional[str] = None
  datetime_format: Optional[str] = None

  def get_column(self, name) -> Optional[Column]:
    for column in self.columns:
      if column.name == name:
        return column
    return None

  @property
  def truncate_length(self) -> int:
    return scaffold_settings().get("truncate_length", DEFAULT_TRUNCATE_LENGTH)


# ------------------------------------------------------------
# Building a list configuration from a model
# ------------------------------------------------------------
def _model_fields_by_name(model):
  """Forward fields by name, reverse relations by accessor name."""
  by_name = {}
  for f in model._meta.get_fields():
    if f.auto_created and not f.concrete:
      by_name[f.get_accessor_name()] = f
    else:
      by_name[f.name] = f
  return by_name


def default_column_names(model):
  """
  Columns shown when none are configured.

  Rules:
  - concrete fields and forward many-to-many fields
  - skip the primary key
  - skip anything in settings.TABULA_CRUD["scaffold"]["exclude"]
  """
  exclude = set(scaffold_settings().get("exclude", []))
  names = []
  for f in model._meta.get_fields():
    if f.auto_created and not f.concrete:
      continue
    if getattr(f, "primary_key", False):
      continue
    if f.name in exclude:
      continue
    names.append(f.name)
  return names


def _build_column(model, controller, name, model_field, options, registry):
  """Create one Column and resolve its override handlers."""
  attrs = dict(options)
  attrs["name"] = name

  if model_field is not None:
    association = Association.from_field(model_field)
    if association is not None:
      attrs.setdefault("association", association)
      if association.singular:
        # autolink: action inferred per record (new / edit / show)
        attrs.setdefault("link", ActionLink(
          controller=association.model._meta.model_name, crud_type=None,
        ))
      label = (
        association.model._meta.verbose_name_plural
        if association.plural and not model_field.concrete
        else getattr(model_field, "verbose_name", name)
      )
    else:
      attrs.setdefault("field_type", FIELD_TYPE_MAP.get(model_field.get_internal_type()))
      label = model_field.verbose_name
  else:
    label = name.replace("_", " ")

  attrs.setdefault("label", str(label).title())

  cfg = scaffold_settings()
  if "associated_limit" in cfg:
    attrs.setdefault("associated_limit", cfg["associated_limit"])
  if "associated_number" in cfg:
    attrs.setdefault("associated_number", cfg["associated_number"])

  column = Column(**attrs)
  return column.derive(
    override=registry.column_override(controller, column.override_name),
    list_ui_override=registry.ui_override(column.list_ui) if column.list_ui else None,
    field_type_override=registry.ui_override(column.field_type) if column.field_type else None,
  )


def build_list_config(model, controller=None, columns=None, column_options=None, registry=None):
  """
  Build the list configuration for a model.

  Override handlers are looked up here, once, so rendering never resolves
  helpers by name.

  Example:
    build_list_config(
      Book,
      columns=["title", "author", "tags"],
      column_options={"title": {"inplace_edit": True}},
    )
  """
  controller = controller or model._meta.model_name
  registry = registry or default_registry
  column_options = column_options or {}
  names = list(columns) if columns is not None else default_column_names(model)

  unknown = set(column_options) - set(names)
  if unknown:
    raise ImproperlyConfigured(
      f"column_options for {model.__name__} name unknown columns: {', '.join(sorted(unknown))}"
    )

  fields_by_name = _model_fields_by_name(model)
  built = []
  for name in names:
    model_field = fields_by_name.get(name)
    if model_field is None and not hasattr(model, name):
      raise ImproperlyConfigured(f"{model.__name__} has no field or attribute '{name}'")
    built.append(_build_column(model, controller, name, model_field, column_options.get(name, {}), registry))

  cfg = scaffold_settings()
  return ListConfig(
    controller=controller,
    model=model,
    columns=tuple(built),
    empty_field_text=cfg.get("empty_field_text", DEFAULT_EMPTY_FIELD_TEXT),
    date_format=cfg.get("date_format"),
    datetime_format=cfg.get("datetime_format"),
  )
