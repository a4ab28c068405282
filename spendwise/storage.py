"""JSON file persistence for transactions, categories and goals.

Every collection lives in its own file and is rewritten in full on save.
Saves go through a temporary file swapped in with ``os.replace`` so a
crash never leaves a half-written collection behind. A file that cannot be
read is copied to ``<name>.corrupt`` before the defaults are used.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from dataclasses import asdict
from pathlib import Path
from typing import Iterable, List, Optional

from spendwise import config
from spendwise.domain import DEFAULT_CATEGORIES, Goal, OTHER, Transaction

logger = logging.getLogger(__name__)


class JsonStore:
    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir or config.DATA_DIR)

    def _path(self, filename: str) -> Path:
        return self.data_dir / filename

    def _read(self, filename: str) -> Optional[list]:
        target = self._path(filename)
        if not target.exists():
            return None
        try:
            with target.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            self._set_aside(target, str(e))
            return None
        if not isinstance(data, list):
            self._set_aside(target, "not a list")
            return None
        logger.debug("Loaded %d records from %s", len(data), target)
        return data

    def _set_aside(self, target: Path, reason: str) -> None:
        backup = target.with_name(target.name + ".corrupt")
        shutil.copyfile(target, backup)
        logger.warning("Could not read %s (%s), copied to %s and using defaults", target, reason, backup)

    def _write(self, filename: str, data: list) -> None:
        target = self._path(filename)
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=target.name, suffix=".tmp", dir=target.parent)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as handle:
                json.dump(data, handle, indent=2, ensure_ascii=False)
            os.replace(tmp, target)
        except BaseException:
            os.unlink(tmp)
            raise
        logger.debug("Saved %d records to %s", len(data), target)

    # ---------- transactions ----------

    def load_transactions(self) -> tuple[Transaction, ...]:
        data = self._read(config.TRANSACTIONS_FILE) or []
        result: List[Transaction] = []
        for item in data:
            try:
                result.append(Transaction(
                    id=int(item["id"]),
                    description=str(item["description"]),
                    amount=float(item["amount"]),
                    category=str(item["category"]),
                    date=str(item["date"]),
                ))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed transaction %r: %s", item, e)
        return tuple(result)

    def save_transactions(self, trans: Iterable[Transaction]) -> None:
        self._write(config.TRANSACTIONS_FILE, [asdict(t) for t in trans])

    # ---------- categories ----------

    def load_categories(self) -> tuple[str, ...]:
        data = self._read(config.CATEGORIES_FILE)
        if not data:
            return DEFAULT_CATEGORIES
        # keep first occurrence, drop duplicates; "Other" must always exist
        categories = tuple(dict.fromkeys(str(c) for c in data))
        if OTHER not in categories:
            logger.warning("Stored categories lack %r, adding it", OTHER)
            categories += (OTHER,)
        return categories

    def save_categories(self, categories: Iterable[str]) -> None:
        self._write(config.CATEGORIES_FILE, list(categories))

    # ---------- goals ----------

    def load_goals(self) -> tuple[Goal, ...]:
        data = self._read(config.GOALS_FILE) or []
        result: List[Goal] = []
        for item in data:
            try:
                goal = Goal(
                    id=int(item["id"]),
                    name=str(item["name"]),
                    target_amount=float(item["target_amount"]),
                    target_date=str(item["target_date"]),
                    current_amount=float(item.get("current_amount", 0)),
                    created_at=str(item["created_at"]),
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed goal %r: %s", item, e)
                continue
            if not goal.target_amount > 0:
                logger.warning("Skipping goal %r with non-positive target", item)
                continue
            result.append(goal)
        return tuple(result)

    def save_goals(self, goals: Iterable[Goal]) -> None:
        self._write(config.GOALS_FILE, [asdict(g) for g in goals])
