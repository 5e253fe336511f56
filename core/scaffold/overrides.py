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

# Registry of list column override helpers.
#
# - column overrides, per controller and column name: handler(helper, record)
# - UI / field type overrides, per type name: handler(helper, column, record)
#
# Handlers are resolved when a list configuration is built, so an override
# must be registered before the configuration that uses it.


class OverrideRegistry:
  def __init__(self):
    self._columns = {}
    self._ui = {}

  def register_column(self, controller, name, handler=None):
    """Register handler(helper, record) for one column; usable as decorator."""
    key = (controller, name.replace("?", ""))

    def decorator(fn):
      self._columns[key] = fn
      return fn

    return decorator(handler) if handler is not None else decorator

  def register_ui(self, ui, handler=None):
    """Register handler(helper, column, record) for a list UI or field type."""
    def decorator(fn):
      self._ui[ui] = fn
      return fn

    return decorator(handler) if handler is not None else decorator

  def column_override(self, controller, name):
    return self._columns.get((controller, name.replace("?", "")))

  def ui_override(self, ui):
    return self._ui.get(ui)


registry = OverrideRegistry()
register_column_override = registry.register_column
register_list_ui_override = registry.register_ui


# ------------------------------------------------------------
# Built-in type handlers
# ------------------------------------------------------------
@register_list_ui_override("text")
def column_text(helper, column, record):
  return helper.column_text(column, record)


@register_list_ui_override("checkbox")
def column_checkbox(helper, column, record):
  return helper.column_checkbox(column, record)
