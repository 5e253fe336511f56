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

from catalog.models import Author, Book
from scaffold.associations import AssociationCollection, cache_association, column_empty
from scaffold.config import build_list_config
from scaffold.list_columns import ListColumnHelper


def _tags(limit=3, **options):
  config = build_list_config(
    Book, columns=["tags"], column_options={"tags": {"associated_limit": limit, **options}},
  )
  return config, config.get_column("tags")


def test_no_query_when_prefetched(catalog, django_assert_num_queries):
  _, column = _tags()
  book = Book.objects.prefetch_related("tags").get(pk=catalog["dune"].pk)
  collection = AssociationCollection(book, column.association)

  with django_assert_num_queries(0):
    assert collection.loaded
    cache_association(collection, column)
    assert collection.size() == 5


def test_window_holds_limit_plus_one(catalog, django_assert_num_queries):
  _, column = _tags(limit=3)
  collection = AssociationCollection(catalog["dune"], column.association)
  assert not collection.loaded

  with django_assert_num_queries(1):
    cache_association(collection, column)

  assert collection.loaded
  assert len(collection.target) == 4
  assert [t.name for t in collection.first(3)] == ["alpha", "beta", "delta"]


def test_window_is_reused(catalog, django_assert_num_queries):
  _, column = _tags(limit=3)
  book = catalog["dune"]
  cache_association(AssociationCollection(book, column.association), column)

  with django_assert_num_queries(0):
    again = AssociationCollection(book, column.association)
    assert again.loaded
    cache_association(again, column)
    assert again.size() == 4


def test_no_limit_logs_warning_and_stays_unloaded(catalog, caplog, django_assert_num_queries):
  _, column = _tags(limit=None)
  collection = AssociationCollection(catalog["dune"], column.association)

  with caplog.at_level(logging.WARNING, logger="scaffold.associations"):
    with django_assert_num_queries(0):
      cache_association(collection, column)

  assert not collection.loaded
  assert "Enable eager loading for tags association" in caplog.text
  # iterating the unloaded handle still works
  assert len(list(collection)) == 5


def test_select_columns_restrict_fetched_fields(catalog):
  config = build_list_config(
    Author, columns=["books"],
    column_options={"books": {"associated_limit": 5, "select_columns": ("title",)}},
  )
  column = config.get_column("books")
  collection = AssociationCollection(catalog["jane"], column.association)
  cache_association(collection, column)

  first = collection.target[0]
  assert "summary" in first.get_deferred_fields()
  assert "title" not in first.get_deferred_fields()


def test_format_counts_before_caching(catalog, django_assert_num_queries):
  config, column = _tags(limit=2)
  helper = ListColumnHelper(config)
  # count query + limited window fetch
  with django_assert_num_queries(2):
    assert helper.format_column_value(catalog["dune"], column) == "alpha, beta, … (5)"


def test_format_with_prefetch_issues_no_query(catalog, django_assert_num_queries):
  config, column = _tags(limit=2)
  helper = ListColumnHelper(config)
  book = Book.objects.prefetch_related("tags").get(pk=catalog["dune"].pk)
  with django_assert_num_queries(0):
    assert helper.format_column_value(book, column) == "alpha, beta, … (5)"


def test_column_empty():
  assert column_empty(None)
  assert column_empty("")
  assert column_empty("&nbsp;")
  assert column_empty([])
  assert column_empty("-", "-")
  assert not column_empty(0)
  assert not column_empty(False)
  assert not column_empty("x")
