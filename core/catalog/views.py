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

from catalog.models import Author, Book, Profile, Publisher, Tag
from catalog.scaffolds import AUTHOR_LIST, BOOK_LIST, PROFILE_LIST, PUBLISHER_LIST, TAG_LIST
from scaffold.views import ScaffoldCRUDView


class AuthorScaffoldView(ScaffoldCRUDView):
  model = Author
  scaffold = AUTHOR_LIST


class BookScaffoldView(ScaffoldCRUDView):
  model = Book
  scaffold = BOOK_LIST


class ProfileScaffoldView(ScaffoldCRUDView):
  model = Profile
  scaffold = PROFILE_LIST


class PublisherScaffoldView(ScaffoldCRUDView):
  model = Publisher
  scaffold = PUBLISHER_LIST


class TagScaffoldView(ScaffoldCRUDView):
  model = Tag
  scaffold = TAG_LIST
