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

from django.http import QueryDict
from django.utils.safestring import mark_safe

from scaffold.authorization import PermissionAuthorizer
from scaffold.constants import EMPTY_CELL
from scaffold.formatting import ValueFormattingMixin
from scaffold.inplace import InplaceEditMixin
from scaffold.links import LinkRenderingMixin


class ListColumnHelper(InplaceEditMixin, LinkRenderingMixin, ValueFormattingMixin):
  """
  Renders list cells of one scaffold for one request.

  Usage:
    helper = ListColumnHelper(config, request)
    for record in objects:
      for column in config.columns:
        helper.list_cell(record, column)
  """

  def __init__(self, config, request=None, authorizer=None):
    self.config = config
    self.request = request
    self.authorizer = authorizer or PermissionAuthorizer.for_request(request)
    self.params = request.GET if request is not None else QueryDict()

  @property
  def controller(self) -> str:
    return self.config.controller

  @property
  def eid(self):
    return self.params.get("eid") or None

  def params_for(self, **options) -> dict:
    """URL parameters for this controller: controller, eid if set, then options."""
    params = {"controller": self.controller}
    if self.eid:
      params["eid"] = self.eid
    params.update(options)
    return params

  def authorized_for(self, subject, action, column=None) -> bool:
    return self.authorizer.authorized(subject, action, column=column)

  def get_column_value(self, record, column):
    """
    Display value of one cell. First match wins:

    1. column override helper, called with the record only
    2. override for the column's list_ui
    3. in-place editing, if enabled and authorized
    4. override for the column's field type
    5. generic formatting
    """
    if column.override is not None:
      value = column.override(self, record)
    elif column.list_ui and column.list_ui_override is not None:
      value = column.list_ui_override(self, column, record)
    elif self.inplace_edit(record, column):
      value = self.active_scaffold_inplace_edit(record, column)
    elif column.field_type and column.field_type_override is not None:
      value = column.field_type_override(self, column, record)
    else:
      value = self.format_column_value(record, column)

    if value is None or (hasattr(value, "__len__") and len(value) == 0):
      value = mark_safe(EMPTY_CELL)
    return value

  def list_cell(self, record, column):
    """Cell value with the column link applied."""
    return self.render_list_column(self.get_column_value(record, column), column, record)
