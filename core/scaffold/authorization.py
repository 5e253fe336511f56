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

from crum import get_current_user

from scaffold.constants import CRUD_PERMISSION_VERBS


class Authorizer:
  """
  Decides whether the current actor may perform a CRUD action.

  `subject` is either a model instance or a model class (used when there is
  no row to check, e.g. before creating one). `column` narrows the check to
  one column of the subject.
  """

  def authorized(self, subject, action, column=None) -> bool:
    raise NotImplementedError


class AllowAllAuthorizer(Authorizer):
  def authorized(self, subject, action, column=None) -> bool:
    return True


class PermissionAuthorizer(Authorizer):
  """
  Default authorizer based on Django model permissions.

  Model instances may refine the decision with a hook:

    def authorized_for(self, user, action, column=None) -> bool

  which replaces the permission check for that instance.
  """

  def __init__(self, user=None):
    self._user = user

  @classmethod
  def for_request(cls, request):
    return cls(getattr(request, "user", None) if request is not None else None)

  @property
  def user(self):
    return self._user if self._user is not None else get_current_user()

  def authorized(self, subject, action, column=None) -> bool:
    user = self.user
    if user is None or not getattr(user, "is_authenticated", False):
      return False

    if not isinstance(subject, type):
      hook = getattr(subject, "authorized_for", None)
      if callable(hook):
        return bool(hook(user, action, column))

    verb = CRUD_PERMISSION_VERBS.get(action)
    if verb is None:
      return False

    model = subject if isinstance(subject, type) else type(subject)
    opts = model._meta
    return user.has_perm(f"{opts.app_label}.{verb}_{opts.model_name}")
