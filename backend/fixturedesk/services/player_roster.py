"""Player registration and CSV import.

CSV format (comma-separated, header row required, column order free):

    Name,MobileNumber,Categories,Paid(Y/N)
    Asha Rao,9876500001,Open|40+,Y

Categories are pipe-delimited. A row is skipped when its mobile number is
already registered in any of the row's categories. Rows that fail player
validation (blank name or mobile, no category, more than two categories)
are counted as invalid and not added.
"""

import csv
import io
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional

from fixturedesk.exceptions import InvalidImportFile, InvalidPlayer
from fixturedesk.schemas import MAX_PLAYER_CATEGORIES, Player, Tournament, new_id

logger = logging.getLogger(__name__)

REQUIRED_HEADERS = ["Name", "MobileNumber", "Categories", "Paid(Y/N)"]
CATEGORY_WARNING_THRESHOLD = 50


@dataclass
class ImportResult:
    tournament: Tournament
    added: int
    skipped: int
    warnings: List[str] = field(default_factory=list)
    invalid: int = 0


def _validate_player(player: Player) -> None:
    if not player.name.strip() or not player.mobile_number.strip() or not player.categories:
        raise InvalidPlayer("Please fill all required fields: Name, Mobile Number, and Categories.")
    if len(player.categories) > MAX_PLAYER_CATEGORIES:
        raise InvalidPlayer(f"A player can be in at most {MAX_PLAYER_CATEGORIES} categories.")


def add_player(tournament: Tournament, player: Player) -> Tournament:
    _validate_player(player)
    return tournament.model_copy(update={"players": [*tournament.players, player]})


def update_player(tournament: Tournament, player: Player) -> Tournament:
    """Replace the player with the same id; identity is kept, attributes change."""
    _validate_player(player)
    if not any(p.id == player.id for p in tournament.players):
        raise InvalidPlayer(f"Player {player.id} not found")
    players = [player if p.id == player.id else p for p in tournament.players]
    return tournament.model_copy(update={"players": players})


def remove_player(tournament: Tournament, player_id: str) -> Tournament:
    if not any(p.id == player_id for p in tournament.players):
        raise InvalidPlayer(f"Player {player_id} not found")
    return tournament.model_copy(update={"players": [p for p in tournament.players if p.id != player_id]})


# ---------------------------------------------------------------------------
# CSV import
# ---------------------------------------------------------------------------


def normalize_category(raw: str, known: List[str]) -> Optional[str]:
    """
    Map a CSV category cell to a tournament category.

    "40" and "40+" both become "40+"; if a configured category matches
    exactly, or starts with the bare value ("Open" for "Op"), it wins.
    """
    value = raw.strip()
    if not value:
        return None
    cat = value if value.endswith("+") else value + "+"
    bare = cat[:-1]
    for candidate in known:
        if candidate == cat or candidate.startswith(bare):
            return candidate
    return cat


def parse_player_rows(csv_text: str, known_categories: List[str]) -> List[Player]:
    """Parse CSV text into Player values (no duplicate checks)."""
    lines = [line for line in csv_text.splitlines() if line.strip()]
    if len(lines) <= 1:
        raise InvalidImportFile("CSV file is empty or has only headers.")

    reader = csv.DictReader(io.StringIO("\n".join(lines)), skipinitialspace=True)
    headers = [h.strip() for h in (reader.fieldnames or [])]
    if not all(h in headers for h in REQUIRED_HEADERS):
        raise InvalidImportFile(f"CSV must contain headers: {', '.join(REQUIRED_HEADERS)}")

    players: List[Player] = []
    for raw_row in reader:
        row = {(k or "").strip(): (v or "").strip() for k, v in raw_row.items() if isinstance(v, str) or v is None}
        categories: List[str] = []
        for part in row["Categories"].split("|"):
            category = normalize_category(part, known_categories)
            if category and category not in categories:
                categories.append(category)
        players.append(
            Player(
                id=new_id("player-csv"),
                name=row["Name"],
                mobile_number=row["MobileNumber"],
                categories=categories,
                fee_paid=row["Paid(Y/N)"].lower() == "y",
            )
        )
    return players


def import_players_csv(tournament: Tournament, csv_text: str) -> ImportResult:
    """
    Add players from CSV text.

    Returns the new tournament plus counts. Categories ending up with more
    than CATEGORY_WARNING_THRESHOLD players are reported as warnings.
    """
    parsed = parse_player_rows(csv_text, tournament.settings.categories)

    registered = {(p.mobile_number, c) for p in tournament.players for c in p.categories}
    per_category = Counter(c for p in tournament.players for c in p.categories)

    new_players: List[Player] = []
    skipped = 0
    invalid = 0
    for row_number, player in enumerate(parsed, start=2):
        try:
            _validate_player(player)
        except InvalidPlayer as exc:
            logger.info("CSV import: row %d rejected: %s", row_number, exc)
            invalid += 1
            continue
        if any((player.mobile_number, c) in registered for c in player.categories):
            skipped += 1
            continue
        new_players.append(player)
        per_category.update(player.categories)

    warnings = [
        f"{cat} ({count} players)"
        for cat, count in per_category.items()
        if count > CATEGORY_WARNING_THRESHOLD
    ]
    if warnings:
        logger.warning("Categories over %d players: %s", CATEGORY_WARNING_THRESHOLD, ", ".join(warnings))
    logger.info("CSV import: %d added, %d skipped, %d invalid", len(new_players), skipped, invalid)

    updated = tournament.model_copy(update={"players": [*tournament.players, *new_players]})
    return ImportResult(
        tournament=updated, added=len(new_players), skipped=skipped, warnings=warnings, invalid=invalid
    )
