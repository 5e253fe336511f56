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

import os, json
from typing import List, Optional

# Every setting read here lives under this prefix: env_str("DEBUG") reads TABULA_DEBUG.
ENV_PREFIX = "TABULA_"

def _raw(key: str) -> Optional[str]:
  val = os.getenv(f"{ENV_PREFIX}{key}")
  return None if val in (None, "") else val

def env_str(key: str, default: Optional[str] = None) -> Optional[str]:
  """Get TABULA_<key> as string with default."""
  val = _raw(key)
  return default if val is None else val

def env_bool(key: str, default: bool = False) -> bool:
  """Get TABULA_<key> as boolean."""
  val = _raw(key)
  return default if val is None else val.strip().lower() in ("1","true","yes","on")

def env_list(key: str, default: Optional[List[str]] = None, sep: str = ",") -> List[str]:
  """Get comma-separated TABULA_<key>."""
  val = _raw(key)
  if val is None:
    return list(default or [])
  return [x.strip() for x in val.split(sep) if x.strip()]

def crud_section(section: str, defaults: dict) -> dict:
  """
  One TABULA_CRUD section: defaults, updated from the JSON object in
  TABULA_CRUD_<SECTION>. Keys without a default are ignored; invalid JSON
  leaves the defaults untouched.
  """
  merged = dict(defaults)
  val = _raw(f"CRUD_{section.upper()}")
  if val is None:
    return merged
  try:
    data = json.loads(val)
  except json.JSONDecodeError:
    return merged
  if isinstance(data, dict):
    merged.update({k: v for k, v in data.items() if k in defaults})
  return merged
