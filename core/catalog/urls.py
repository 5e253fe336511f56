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

from django.views.generic import RedirectView
from django.urls import path

from catalog import views
from scaffold.urls import scaffold_urlpatterns

urlpatterns = [
  path("", RedirectView.as_view(pattern_name="book_list", permanent=False), name="catalog_index"),
]

for view_cls in (
  views.BookScaffoldView,
  views.AuthorScaffoldView,
  views.ProfileScaffoldView,
  views.PublisherScaffoldView,
  views.TagScaffoldView,
):
  urlpatterns += scaffold_urlpatterns(view_cls)
