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
import logging

from django.utils import timezone
from django.utils.formats import date_format, time_format
from django.utils.html import escape, format_html
from django.utils.text import Truncator
from django.utils.translation import gettext

from scaffold.associations import (
  cache_association, column_empty, label_for, read_column_value,
)
from scaffold.config import scaffold_settings
from scaffold.constants import TRUNCATION_MARKER, UI_TEXT

logger = logging.getLogger(__name__)


def clean_column_value(value):
  """
  Escape a cell value for HTML output.

  Escaping is the default policy; columns holding trusted markup should use
  an override helper instead.
  """
  return escape(value)


def ui_text(key) -> str:
  return str(UI_TEXT[key])


def boolean_label(value) -> str:
  """Translated "true" / "false" token; settings may replace the defaults."""
  key = "true" if value else "false"
  custom = scaffold_settings().get("boolean_labels", {}).get(key)
  if custom is not None:
    return gettext(custom)
  return ui_text(key)


class ValueFormattingMixin:
  """Formatting part of the list column helper. Expects self.config."""

  def format_value(self, value, options=None):
    """Localized, type-aware and escaped string for a raw value."""
    options = options or {}
    empty_text = self.config.empty_field_text

    if column_empty(value, empty_text):
      text = empty_text
    elif isinstance(value, datetime.datetime):
      if timezone.is_aware(value):
        value = timezone.localtime(value)
      text = date_format(value, options.get("format") or self.config.datetime_format or "DATETIME_FORMAT")
    elif isinstance(value, datetime.date):
      text = self.format_date(value, options.get("format") or self.config.date_format or "DATE_FORMAT")
    elif isinstance(value, datetime.time):
      text = time_format(value, options.get("format") or "TIME_FORMAT")
    elif isinstance(value, bool):
      text = boolean_label(value)
    else:
      text = str(value)

    return clean_column_value(text)

  def format_date(self, value, fmt):
    try:
      return date_format(value, fmt)
    except TypeError:
      # time specifiers in a date pattern
      logger.warning("Date format %r has time specifiers; using DATE_FORMAT for %s", fmt, value)
      return date_format(value, "DATE_FORMAT")

  def format_column_value(self, record, column):
    value = read_column_value(record, column)
    associated_size = None
    if value is not None and column.plural_association:
      # count before caching; the cached window is capped at limit + 1
      if column.associated_number:
        associated_size = value.size()
      cache_association(value, column)

    if column.association is None or column_empty(value):
      return self.format_value(value, column.options)
    return self.format_association_value(value, column, associated_size)

  def format_association_value(self, value, column, size):
    if column.singular_association:
      return self.format_value(label_for(value))

    limit = column.associated_limit
    if limit == 0:
      # count only; nothing at all when the count is switched off
      return str(size) if column.associated_number else None

    if limit is None:
      firsts = [label_for(v) for v in value]
    else:
      firsts = [label_for(v) for v in value.first(limit)]
      if value.size() > limit:
        firsts.append(TRUNCATION_MARKER)

    joined = self.format_value(", ".join(firsts))
    if column.associated_number and limit and value.size() > limit:
      joined = format_html("{} ({})", joined, size)
    return joined

  def column_text(self, column, record):
    """Escaped value truncated to options["truncate"] characters."""
    value = read_column_value(record, column)
    if value is None:
      return ""
    length = column.options.get("truncate") or self.config.truncate_length
    return clean_column_value(Truncator(str(value)).chars(length))
