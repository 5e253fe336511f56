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

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.forms import modelform_factory
from django.http import HttpResponse, HttpResponseNotFound, QueryDict
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils.html import conditional_escape, escape
from django.utils.translation import gettext_lazy as _
from django.views import View

from scaffold.config import build_list_config
from scaffold.constants import CRUD_CREATE, CRUD_READ, CRUD_UPDATE, UPDATE_COLUMN_ACTION
from scaffold.inplace import column_form_class, editable_field_names
from scaffold.list_columns import ListColumnHelper

logger = logging.getLogger(__name__)


class ScaffoldCRUDView(LoginRequiredMixin, View):
  """Scaffold view for one model: list, row, show, new/edit and update_column."""
  login_url = getattr(settings, "LOGIN_URL", "/accounts/login/")
  redirect_field_name = "next"

  model = None
  scaffold = None
  authorizer = None
  template_list = "scaffold/list.html"
  template_row = "scaffold/_row.html"
  template_show = "scaffold/show.html"
  template_form = "scaffold/form.html"
  action = "list"

  # --------------------------------------------------
  # Dispatch routing
  # --------------------------------------------------
  def dispatch(self, request, *args, **kwargs):
    """Dispatch request by 'action' name."""
    # replaces LoginRequiredMixin.dispatch, so check here
    if not request.user.is_authenticated:
      return self.handle_no_permission()

    self.action = kwargs.pop("action", self.action)
    pk = kwargs.get("pk")

    if request.method == "GET":
      if self.action == "list":
        return self.list(request)
      if self.action == "row":
        return self.row(request, pk)
      if self.action == "show":
        return self.show(request, pk)
      if self.action in ("new", "edit"):
        return self.edit(request, pk)

    if request.method == "POST":
      if self.action in ("new", "edit"):
        return self.edit(request, pk)
      if self.action == UPDATE_COLUMN_ACTION:
        return self.update_column(request)

    return HttpResponseNotFound(f"Invalid action '{self.action}' for {self.__class__.__name__}")

  # --------------------------------------------------
  # Utility helpers
  # --------------------------------------------------
  def get_list_config(self):
    if self.scaffold is None:
      self.scaffold = build_list_config(self.model)
    return self.scaffold

  def get_helper(self, request):
    return ListColumnHelper(self.get_list_config(), request, authorizer=self.authorizer)

  def get_queryset(self):
    return self.model.objects.all().order_by("pk")

  def get_success_url(self):
    return reverse(f"{self.get_list_config().controller}_list")

  def _param(self, request, name):
    """POST value, falling back to the query string."""
    value = request.POST.get(name)
    if value is None:
      value = request.GET.get(name)
    return value

  def _context(self, request, **extra):
    config = self.get_list_config()
    context = {
      "model": self.model,
      "meta": self.model._meta,
      "scaffold": config,
      "columns": config.columns,
      "scaffold_helper": self.get_helper(request),
      "controller": config.controller,
    }
    context.update(extra)
    return context

  # --------------------------------------------------
  # List
  # --------------------------------------------------
  def list(self, request):
    context = self._context(
      request,
      objects=self.get_queryset(),
      title=self.model._meta.verbose_name_plural.title(),
    )
    return render(request, self.template_list, context)

  def row(self, request, pk):
    obj = get_object_or_404(self.model, pk=pk)
    return render(request, self.template_row, self._context(request, object=obj))

  # --------------------------------------------------
  # Show / new / edit (targets of association links)
  # --------------------------------------------------
  def show(self, request, pk):
    obj = get_object_or_404(self.model, pk=pk)
    helper = self.get_helper(request)
    if not helper.authorized_for(obj, CRUD_READ):
      return HttpResponse(status=403)
    context = self._context(
      request,
      object=obj,
      title=f"{self.model._meta.verbose_name.title()} Details",
    )
    return render(request, self.template_show, context)

  def edit(self, request, pk=None):
    obj = get_object_or_404(self.model, pk=pk) if pk else None
    helper = self.get_helper(request)
    allowed = helper.authorized_for(obj, CRUD_UPDATE) if obj else helper.authorized_for(self.model, CRUD_CREATE)
    if not allowed:
      return HttpResponse(status=403)

    names = [c.name for c in self.get_list_config().columns if c.name in editable_field_names(self.model)]
    FormClass = modelform_factory(self.model, fields=names)

    if request.method == "POST":
      form = FormClass(request.POST, instance=obj)
      if form.is_valid():
        form.save()
        messages.success(request, _("Saved successfully."))
        return redirect(self.get_success_url())
    else:
      form = FormClass(instance=obj)

    context = self._context(
      request,
      form=form,
      object=obj,
      title=_("Edit") if pk else _("Create"),
      cancel_url=self.get_success_url(),
    )
    return render(request, self.template_form, context)

  # --------------------------------------------------
  # In-place editing endpoint
  # --------------------------------------------------
  def update_column(self, request):
    """
    Save one column of one record, posted by the in-place editor or a
    checkbox toggle.

    Expects POST parameters: column, id, value (eid and the CSRF token are
    handled by the editor / middleware). Returns the re-rendered cell value.
    """
    config = self.get_list_config()
    column_name = self._param(request, "column")
    if not column_name:
      return HttpResponse("Missing column", status=400)

    column = config.get_column(column_name)
    if column is None or not column.inplace_edit:
      logger.warning("update_column: %s.%s is not editable inline", config.controller, column_name)
      return HttpResponse("Column not editable", status=400)

    obj = get_object_or_404(self.model, pk=self._param(request, "id"))
    helper = self.get_helper(request)
    if not helper.inplace_edit(obj, column):
      logger.warning(
        "update_column: %s may not update %s.%s (pk=%s)",
        request.user, config.controller, column.name, obj.pk,
      )
      return HttpResponse(status=403)

    if column.name not in editable_field_names(self.model):
      return HttpResponse("Column not editable", status=400)

    data = QueryDict(mutable=True)
    data.setlist(column.name, request.POST.getlist("value"))
    form = column_form_class(self.model, column)(data, instance=obj)
    if not form.is_valid():
      errors = "; ".join(str(e) for e in form.errors.get(column.name, []))
      logger.warning("update_column: invalid value for %s.%s: %s", config.controller, column.name, errors)
      return HttpResponse(escape(errors), status=400)

    form.save()
    # no template here; plain str handler output is escaped like in a template
    return HttpResponse(conditional_escape(helper.get_column_value(obj, column)))
