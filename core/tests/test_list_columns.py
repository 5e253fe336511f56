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

import pytest
from django.core.exceptions import ImproperlyConfigured
from django.utils.html import format_html

from catalog.models import Author, Book
from scaffold.config import Column, build_list_config
from scaffold.overrides import OverrideRegistry, registry


@pytest.fixture
def local_registry():
  reg = OverrideRegistry()
  reg.register_ui("text", registry.ui_override("text"))
  reg.register_ui("checkbox", registry.ui_override("checkbox"))
  return reg


def test_column_override_gets_only_the_record(catalog, make_helper, local_registry):
  calls = []

  @local_registry.register_column("book", "title")
  def title_column(helper, record):
    calls.append((helper, record))
    return "custom"

  config = build_list_config(Book, columns=["title"], registry=local_registry)
  helper = make_helper(config)

  assert helper.get_column_value(catalog["dune"], config.get_column("title")) == "custom"
  assert calls == [(helper, catalog["dune"])]


def test_column_override_wins_over_list_ui(catalog, make_helper, local_registry):
  local_registry.register_column("book", "in_print", lambda helper, record: "by name")
  config = build_list_config(
    Book, columns=["in_print"], registry=local_registry,
    column_options={"in_print": {"list_ui": "checkbox"}},
  )
  helper = make_helper(config)
  assert helper.get_column_value(catalog["dune"], config.get_column("in_print")) == "by name"


def test_list_ui_override_gets_column_and_record(catalog, make_helper, local_registry):
  seen = []

  @local_registry.register_ui("stars")
  def stars(helper, column, record):
    seen.append((column.name, record))
    return "***"

  config = build_list_config(
    Book, columns=["title"], registry=local_registry,
    column_options={"title": {"list_ui": "stars", "inplace_edit": True}},
  )
  helper = make_helper(config)
  assert helper.get_column_value(catalog["dune"], config.get_column("title")) == "***"
  assert seen == [("title", catalog["dune"])]


def test_inplace_edit_comes_before_field_type_override(catalog, make_helper, local_registry):
  local_registry.register_ui("string", lambda helper, column, record: "typed")
  config = build_list_config(
    Book, columns=["title"], registry=local_registry,
    column_options={"title": {"inplace_edit": True}},
  )
  value = make_helper(config).get_column_value(catalog["dune"], config.get_column("title"))
  assert 'class="in_place_editor_field"' in value


def test_field_type_override_when_inplace_denied(catalog, make_helper, local_registry, rule_authorizer):
  local_registry.register_ui("string", lambda helper, column, record: "typed")
  config = build_list_config(
    Book, columns=["title"], registry=local_registry,
    column_options={"title": {"inplace_edit": True}},
  )
  helper = make_helper(config, authorizer=rule_authorizer(denied={("Book", "update", "title")}))
  assert helper.get_column_value(catalog["dune"], config.get_column("title")) == "typed"


def test_builtin_text_handler_for_text_fields(catalog, make_helper):
  jane = catalog["jane"]
  jane.bio = "<b>" + "y" * 80
  config = build_list_config(Author, columns=["bio"])
  value = make_helper(config).get_column_value(jane, config.get_column("bio"))
  assert value.startswith("&lt;b&gt;yy")
  assert value.endswith("…")


@pytest.mark.parametrize("result", [None, "", []])
def test_empty_results_become_placeholder(catalog, make_helper, local_registry, result):
  local_registry.register_column("book", "title", lambda helper, record: result)
  config = build_list_config(Book, columns=["title"], registry=local_registry)
  assert make_helper(config).get_column_value(catalog["dune"], config.get_column("title")) == "&nbsp;"


def test_plain_column_is_escaped_without_placeholder(catalog, make_helper):
  jane = catalog["jane"]
  jane.name = "Jane <script>"
  config = build_list_config(Author, columns=["name"])
  assert make_helper(config).list_cell(jane, config.get_column("name")) == "Jane &lt;script&gt;"


def test_boolean_column_renders_token(catalog, make_helper, settings):
  settings.TABULA_CRUD = {"scaffold": {"boolean_labels": {"true": "Yes"}}}
  config = build_list_config(Book, columns=["in_print"])
  assert make_helper(config).get_column_value(catalog["dune"], config.get_column("in_print")) == "Yes"


def test_empty_singular_association_without_link(catalog, make_helper):
  config = build_list_config(Book, columns=["publisher"], column_options={"publisher": {"link": None}})
  assert make_helper(config).list_cell(catalog["orphan"], config.get_column("publisher")) == "-"


def test_overrides_are_resolved_at_configuration_time(catalog, make_helper, local_registry):
  config = build_list_config(Book, columns=["title"], registry=local_registry)
  local_registry.register_column("book", "title", lambda helper, record: "too late")
  assert make_helper(config).get_column_value(catalog["dune"], config.get_column("title")) == "Dune"


def test_override_name_strips_question_marks(local_registry):
  handler = lambda helper, record: format_html("<i>{}</i>", record)  # noqa: E731
  local_registry.register_column("book", "published?", handler)
  assert local_registry.column_override("book", "published") is handler
  assert Column(name="published?").override_name == "published"


def test_unknown_column_is_a_configuration_error():
  with pytest.raises(ImproperlyConfigured):
    build_list_config(Book, columns=["nope"])


def test_options_for_unknown_column_are_a_configuration_error():
  with pytest.raises(ImproperlyConfigured):
    build_list_config(Book, columns=["title"], column_options={"author": {"inplace_edit": True}})


def test_default_columns_skip_primary_key_and_excluded(settings):
  settings.TABULA_CRUD = {"scaffold": {"exclude": ["summary"]}}
  names = [c.name for c in build_list_config(Book).columns]
  assert "id" not in names
  assert "summary" not in names
  assert names[:3] == ["title", "author", "publisher"]
  assert "tags" in names


def test_derived_columns_leave_the_original_alone():
  column = Column(name="title", options={"size": 40, "update_column": True})
  stripped = column.without_option("update_column")
  changed = column.derive(form_ui="select")

  assert "update_column" in column.options
  assert "update_column" not in stripped.options
  assert column.form_ui is None
  assert changed.form_ui == "select"


def test_association_macros():
  config = build_list_config(Author, columns=["books", "profile"])
  assert config.get_column("books").association.macro == "has_many"
  assert config.get_column("profile").association.macro == "has_one"

  config = build_list_config(Book, columns=["author", "tags"])
  assert config.get_column("author").association.macro == "belongs_to"
  assert config.get_column("tags").association.macro == "has_and_belongs_to_many"
  assert config.get_column("author").autolink
  assert config.get_column("tags").link is None
