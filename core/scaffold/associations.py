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

import logging

from django.core.exceptions import ObjectDoesNotExist

from scaffold.constants import EMPTY_CELL, HAS_MANY

logger = logging.getLogger(__name__)

# Preview windows installed by cache_association, per record instance.
WINDOW_ATTR = "_scaffold_association_windows"


def _windows(record) -> dict:
  windows = record.__dict__.get(WINDOW_ATTR)
  if windows is None:
    windows = {}
    record.__dict__[WINDOW_ATTR] = windows
  return windows


class AssociationCollection:
  """
  Handle on a to-many relation of one record.

  Wraps the related manager and knows whether the related rows are already
  materialized, either through prefetch_related() or through a preview
  window installed by cache_association().
  """

  def __init__(self, record, association):
    self.record = record
    self.association = association
    self.manager = getattr(record, association.name)

  def _prefetched(self):
    # A prefetched manager hands out its cached queryset without a query.
    qs = self.manager.all()
    if qs._result_cache is not None:
      return qs._result_cache
    return None

  @property
  def target(self):
    """Materialized rows, or None if nothing is loaded yet."""
    window = _windows(self.record).get(self.association.name)
    if window is not None:
      return window
    return self._prefetched()

  @property
  def loaded(self) -> bool:
    return self.target is not None

  def install(self, entities):
    _windows(self.record)[self.association.name] = list(entities)

  def find(self, limit, only=None):
    """Bounded fetch, optionally restricted to the given columns."""
    qs = self.manager.all()
    if only:
      fk = getattr(self.manager, "field", None)
      if self.association.macro == HAS_MANY and fk is not None:
        # the back reference is set on every row; deferring it costs a query each
        only = (*only, fk.name)
      qs = qs.only(*only)
    return list(qs[:limit])

  def size(self) -> int:
    target = self.target
    if target is not None:
      return len(target)
    return self.manager.count()

  def first(self, n):
    target = self.target
    if target is not None:
      return list(target[:n])
    return self.find(n)

  def is_empty(self) -> bool:
    return self.size() == 0

  def __iter__(self):
    target = self.target
    if target is not None:
      return iter(target)
    return iter(self.manager.all())

  def __len__(self):
    return self.size()


def cache_association(collection, column):
  """
  Make a bounded preview of a to-many association available.

  Nothing happens if the rows are already loaded. With a limit, limit + 1
  rows are fetched; the extra row only tells whether the list is truncated.
  Without a limit the association stays unloaded and a warning is logged.
  """
  if collection.loaded:
    return
  if column.associated_limit is None:
    logger.warning("Enable eager loading for %s association to reduce SQL queries", column.name)
    return
  collection.install(collection.find(column.associated_limit + 1, only=column.select_columns))


def read_column_value(record, column):
  """
  Raw value of a column.

  Returns the related instance (or None) for singular associations and an
  AssociationCollection for plural ones.
  """
  if column.association is None:
    value = getattr(record, column.name, None)
    return value() if callable(value) else value

  if column.plural_association:
    return AssociationCollection(record, column.association)

  try:
    return getattr(record, column.association.name)
  except ObjectDoesNotExist:
    # reverse one-to-one without a related row
    return None


def label_for(entity) -> str:
  """Display label of a related entity: to_label() if defined, else str()."""
  to_label = getattr(entity, "to_label", None)
  if callable(to_label):
    return to_label()
  return str(entity)


def column_empty(value, empty_field_text=None) -> bool:
  if value is None:
    return True
  if isinstance(value, AssociationCollection):
    return value.is_empty()
  if isinstance(value, str):
    return value in ("", EMPTY_CELL, empty_field_text)
  if isinstance(value, (list, tuple, set, dict)):
    return len(value) == 0
  return False
