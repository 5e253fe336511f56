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

from urllib.parse import urlencode

from django.forms.utils import flatatt
from django.urls import NoReverseMatch, reverse
from django.utils.html import format_html

from scaffold.associations import column_empty, read_column_value
from scaffold.constants import CRUD_CREATE, CRUD_READ, CRUD_UPDATE
from scaffold.formatting import ui_text


def url_for(params) -> str:
  """
  Build a URL from scaffold parameters.

  The route name is "<controller>_<action>". If the route takes a pk, the
  "id" parameter fills it; all other parameters go to the query string.
  """
  params = {k: v for k, v in params.items() if v is not None}
  controller = params.pop("controller")
  action = params.pop("action", None) or "list"
  name = f"{controller}_{action}"

  url = None
  if "id" in params:
    try:
      url = reverse(name, kwargs={"pk": params["id"]})
      params.pop("id")
    except NoReverseMatch:
      url = None
  if url is None:
    url = reverse(name)

  query = urlencode(params)
  return f"{url}?{query}" if query else url


class LinkRenderingMixin:
  """
  Link part of the list column helper.

  Expects self.controller, self.params_for() and self.authorized_for().
  """

  def render_list_column(self, text, column, record):
    """Wrap a formatted cell value in the column's link, if any."""
    if column.link is None:
      return text

    link = column.link
    associated = read_column_value(record, column) if column.association else None
    url_options = self.params_for(action=None, id=record.pk, link=str(text))

    if column.association and link.controller != self.controller:
      url_options[f"{record._meta.model_name}_id"] = url_options.pop("id")
      if associated is not None and column.singular_association:
        url_options["id"] = associated.pk

    if column.autolink and column.singular_association:
      link = self.action_link_to_inline_form(column, associated)
      if link.crud_type is None:
        return text
      if link.crud_type == CRUD_CREATE:
        url_options["link"] = ui_text("create_new")

    if column.association:
      if column_empty(associated):
        subject = column.association.model
      elif column.plural_association:
        subject = associated.first(1)[0]
      else:
        subject = associated
      authorized = self.authorized_for(subject, link.crud_type)
      if link.crud_type == CRUD_CREATE:
        # creating the related row edits this record's association
        authorized = authorized and self.authorized_for(record, CRUD_UPDATE, column=column.name)
    else:
      authorized = self.authorized_for(record, link.crud_type)

    if not authorized:
      return format_html('<a class="disabled">{}</a>', text)
    return self.render_action_link(link, url_options, text)

  def action_link_to_inline_form(self, column, associated):
    """
    Infer the target of an automatic association link.

    Empty association -> new (create), else edit (update), else show (read).
    Returns a link with crud_type None when no permitted action fits.
    """
    link = column.link
    allowed = column.actions_for_association_links
    if column_empty(associated):
      if "new" in allowed:
        return link.derive(action="new", crud_type=CRUD_CREATE)
    elif "edit" in allowed:
      return link.derive(action="edit", crud_type=CRUD_UPDATE)
    elif "show" in allowed:
      return link.derive(action="show", crud_type=CRUD_READ)
    return link.derive(crud_type=None)

  def render_action_link(self, link, url_options, text):
    params = dict(url_options)
    params.update(link.parameters)
    params["controller"] = link.controller or self.controller
    params["action"] = link.action
    attrs = dict(link.html_options)
    if link.label:
      attrs.setdefault("title", str(link.label))
    return format_html('<a href="{}"{}>{}</a>', url_for(params), flatatt(attrs), text)
