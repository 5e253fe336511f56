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

import json
import re

from django import forms
from django.conf import settings
from django.forms import modelform_factory
from django.forms.utils import flatatt
from django.middleware.csrf import get_token
from django.utils.html import format_html
from django.utils.safestring import mark_safe

from scaffold.associations import read_column_value
from scaffold.constants import (
  CRUD_UPDATE, INPLACE_EDIT_CONTROL_CLASS, INPLACE_EDITOR_FIELD_CLASS,
  INPLACE_EDITOR_JS_CLASS, UPDATE_COLUMN_ACTION,
)
from scaffold.formatting import ui_text
from scaffold.links import url_for

CSRF_MIDDLEWARE = "django.middleware.csrf.CsrfViewMiddleware"
CSRF_PARAM = "csrfmiddlewaretoken"

# Keeps "</script>" and friends out of inline script content.
_JS_ESCAPES = {
  ord("<"): "\\u003C",
  ord(">"): "\\u003E",
  ord("&"): "\\u0026",
}

# (editor option, JS option) pairs copied as-is when set
_JS_OPTIONS = (
  ("cancel_text", "cancelText"),
  ("save_text", "okText"),
  ("loading_text", "loadingText"),
  ("saving_text", "savingText"),
  ("rows", "rows"),
  ("cols", "cols"),
  ("size", "size"),
  ("external_control", "externalControl"),
  ("ajax_options", "ajaxOptions"),
  ("click_to_edit_text", "clickToEditText"),
  ("text_between_controls", "textBetweenControls"),
  ("inplace_pattern_selector", "inplacePatternSelector"),
  ("node_id_suffix", "nodeIdSuffix"),
)

# column options the editor accepts; anything else is for the formatter
EDITOR_OPTION_KEYS = frozenset(key for key, _ in _JS_OPTIONS) | {"load_text_url"}


def clean_id(value) -> str:
  return re.sub(r"[^-_0-9a-zA-Z]", "-", str(value))


def js_literal(value) -> str:
  return json.dumps(value, default=str).translate(_JS_ESCAPES)


def editable_field_names(model):
  """Fields a ModelForm can edit: editable concrete fields and forward m2m."""
  names = set()
  for f in model._meta.get_fields():
    if f.auto_created and not f.concrete:
      continue
    if getattr(f, "editable", False) and not getattr(f, "primary_key", False):
      names.add(f.name)
  return names


def column_form_class(model, column):
  return modelform_factory(model, fields=[column.name])


class InplaceEditMixin:
  """
  In-place editing part of the list column helper.

  Cell life cycle on the client: Display -> Editing -> Saving -> Display,
  or Editing -> Display on cancel. The widget posts to the update_column
  route of the controller.
  """

  def inplace_edit(self, record, column) -> bool:
    return bool(column.inplace_edit) and self.authorized_for(record, CRUD_UPDATE, column=column.name)

  def controller_id(self) -> str:
    return clean_id(f"as_{self.controller}")

  def element_cell_id(self, record, column) -> str:
    return clean_id(f"{self.controller_id()}-{UPDATE_COLUMN_ACTION}-{record.pk}-{column.name}-cell")

  def column_header_id(self, column) -> str:
    return clean_id(f"{self.controller_id()}-{column.name}-column")

  def update_column_url_options(self, record, column, **extra):
    options = {
      "controller": self.controller,
      "action": UPDATE_COLUMN_ACTION,
      "column": column.name,
      "id": str(record.pk),
    }
    options.update(extra)
    return options

  def protect_against_forgery(self) -> bool:
    return self.request is not None and CSRF_MIDDLEWARE in settings.MIDDLEWARE

  def form_params(self) -> dict:
    """Extra POST parameters: editor session id and CSRF token."""
    params = {}
    if self.eid:
      params["eid"] = self.eid
    if self.protect_against_forgery():
      params[CSRF_PARAM] = get_token(self.request)
    return params

  def format_inplace_edit_column(self, record, column):
    if column.list_ui == "checkbox":
      return self.column_checkbox(column, record)
    return self.format_column_value(record, column)

  def active_scaffold_inplace_edit(self, record, column):
    formatted = self.format_inplace_edit_column(record, column)
    cell_id = self.element_cell_id(record, column)
    options = {
      "url": self.update_column_url_options(record, column),
      "click_to_edit_text": ui_text("click_to_edit"),
      "cancel_text": ui_text("cancel"),
      "loading_text": ui_text("loading"),
      "save_text": ui_text("update"),
      "saving_text": ui_text("saving"),
      "ajax_options": {"method": "post"},
      "script": True,
      "inplace_pattern_selector": f"#{self.column_header_id(column)} .{INPLACE_EDIT_CONTROL_CLASS}",
      "node_id_suffix": str(record.pk),
    }
    options.update({k: v for k, v in column.options.items() if k in EDITOR_OPTION_KEYS})
    span = format_html('<span id="{}" class="{}">{}</span>', cell_id, INPLACE_EDITOR_FIELD_CLASS, formatted)
    return span + self.in_place_editor(cell_id, options)

  def in_place_editor(self, field_id, options):
    """<script> binding the client-side in-place editor to field_id."""
    js_options = {}
    for key, js_key in _JS_OPTIONS:
      if options.get(key) is not None:
        js_options[js_key] = options[key]
    if options.get("load_text_url"):
      js_options["loadTextURL"] = url_for(options["load_text_url"])
    if options.get("script"):
      js_options["htmlResponse"] = False
    params = self.form_params()
    if params:
      js_options["params"] = params

    args = [field_id, url_for(options["url"])]
    if js_options:
      args.append(js_options)
    function = "new %s(%s)" % (INPLACE_EDITOR_JS_CLASS, ", ".join(js_literal(a) for a in args))
    return format_html("<script>{};</script>", mark_safe(function))

  def column_checkbox(self, column, record):
    """Checkbox cell; toggles via update_column when editable inline."""
    value = read_column_value(record, column)
    checked = value if isinstance(value, bool) else value == 1

    if not self.inplace_edit(record, column):
      return format_html("<input{}>", flatatt({"type": "checkbox", "value": "1", "checked": checked, "disabled": True}))

    cell_id = self.element_cell_id(record, column)
    vals = {"value": "false" if checked else "true"}
    vals.update(self.form_params())
    url = url_for(self.update_column_url_options(record, column))
    checkbox = format_html("<input{}>", flatatt({
      "type": "checkbox",
      "id": f"{cell_id}-input",
      "value": "1",
      "checked": checked,
      "hx-post": url,
      "hx-vals": json.dumps(vals),
      "hx-target": f"#{cell_id}",
      "hx-swap": "outerHTML",
    }))
    return format_html('<span id="{}" class="{}">{}</span>', cell_id, INPLACE_EDITOR_FIELD_CLASS, checkbox)

  # ------------------------------------------------------------
  # Hidden edit control (one per column header)
  # ------------------------------------------------------------
  def inplace_edit_control(self, column):
    model = self.config.model
    if not self.inplace_edit(model, column):
      return ""
    control_column = column.without_option(UPDATE_COLUMN_ACTION)
    if (control_column.association and control_column.form_ui is None) or control_column.form_ui == "record_select":
      control_column = control_column.derive(form_ui="select")
    return format_html(
      '<div style="display:none;" class="{}">{}</div>',
      INPLACE_EDIT_CONTROL_CLASS,
      self.input_for(control_column, model()),
    )

  def input_for(self, column, record):
    """Form widget HTML for one column of record ("" if not editable)."""
    model = type(record)
    if column.name not in editable_field_names(model):
      return ""
    form = column_form_class(model, column)(instance=record, prefix="record")
    if column.form_ui == "select":
      form_field = form.fields[column.name]
      has_choices = hasattr(form_field, "choices")
      if has_choices and not isinstance(form_field.widget, (forms.Select, forms.SelectMultiple)):
        form_field.widget = forms.Select(choices=form_field.choices)
    return form[column.name].as_widget()
