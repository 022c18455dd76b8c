#===============================================================================
#  Iris_Application_Hub | icons.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Technology icon catalog. Icons are "<name>-original.svg" files, e.g.
#  react-original.svg -> "react". Display only.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

ICON_SUFFIX = "-original.svg"


class IconCatalog:
    def __init__(self, icons_dir: Path):
        self.icons_dir = Path(icons_dir)
        self._icons: Dict[str, Path] = self._scan()

    def _scan(self) -> Dict[str, Path]:
        if not self.icons_dir.is_dir():
            return {}
        icons: Dict[str, Path] = {}
        for p in self.icons_dir.iterdir():
            if p.is_file() and p.name.lower().endswith(ICON_SUFFIX):
                icons[p.name[: -len(ICON_SUFFIX)].lower()] = p
        return icons

    def names(self) -> List[str]:
        return sorted(self._icons)

    def path_for(self, key: str) -> Optional[Path]:
        return self._icons.get((key or "").strip().lower())
