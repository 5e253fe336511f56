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

from django import template

register = template.Library()


@register.simple_tag(takes_context=True)
def column_value(context, record, column):
  """Rendered list cell: {% column_value record column %}."""
  return context["scaffold_helper"].list_cell(record, column)


@register.simple_tag(takes_context=True)
def inplace_edit_control(context, column):
  """Hidden edit control for an in-place editable column header."""
  return context["scaffold_helper"].inplace_edit_control(column)


@register.simple_tag(takes_context=True)
def column_header_id(context, column):
  return context["scaffold_helper"].column_header_id(column)

