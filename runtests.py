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

import os
import sys
from pathlib import Path

import pytest


def main():
  """Configure Django and run pytest."""
  root = Path(__file__).resolve().parent

  # Ensure 'utils' (repo root) and the Django apps (core/) can be imported
  for path in (root, root / "core"):
    if str(path) not in sys.path:
      sys.path.insert(0, str(path))

  os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tabula_site.settings")

  return pytest.main([str(root / "core" / "tests")])


if __name__ == "__main__":
  raise SystemExit(main())
