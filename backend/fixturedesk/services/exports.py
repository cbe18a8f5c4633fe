"""CSV exports of players, groups and match results."""

import csv
import io
from typing import Any, Dict, List

from fixturedesk.schemas import Tournament

PLAYER_COLUMNS = ["PlayerID", "Name", "MobileNumber", "Category1", "Category2", "FeePaid"]
FIXTURE_COLUMNS = ["Category", "Type", "Group", "Players"]
RESULT_COLUMNS = ["Category", "Type", "Group", "Player1", "Player2", "ScoreP1", "ScoreP2", "Status"]


def _to_csv(columns: List[str], rows: List[Dict[str, Any]]) -> str:
    if not rows:
        return ""
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=columns, lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buf.getvalue()


def export_players_csv(tournament: Tournament) -> str:
    rows = [
        {
            "PlayerID": p.id,
            "Name": p.name,
            "MobileNumber": p.mobile_number,
            "Category1": p.categories[0] if len(p.categories) > 0 else "",
            "Category2": p.categories[1] if len(p.categories) > 1 else "",
            "FeePaid": "Yes" if p.fee_paid else "No",
        }
        for p in tournament.players
    ]
    return _to_csv(PLAYER_COLUMNS, rows)


def export_fixtures_csv(tournament: Tournament) -> str:
    names = {p.id: p.name for p in tournament.players}
    rows = []
    for fixture in tournament.fixtures:
        for group in fixture.groups:
            rows.append(
                {
                    "Category": fixture.category,
                    "Type": fixture.event_type,
                    "Group": group.name,
                    "Players": " | ".join(names.get(pid, pid) for pid in group.player_ids),
                }
            )
    return _to_csv(FIXTURE_COLUMNS, rows)


def export_match_results_csv(tournament: Tournament) -> str:
    names = {p.id: p.name for p in tournament.players}
    rows = []
    for fixture in tournament.fixtures:
        for group in fixture.groups:
            for m in group.matches:
                rows.append(
                    {
                        "Category": fixture.category,
                        "Type": fixture.event_type,
                        "Group": group.name,
                        "Player1": names.get(m.player1_id, "N/A"),
                        "Player2": names.get(m.player2_id, "N/A"),
                        "ScoreP1": "" if m.score_p1 is None else m.score_p1,
                        "ScoreP2": "" if m.score_p2 is None else m.score_p2,
                        "Status": m.status.value,
                    }
                )
    return _to_csv(RESULT_COLUMNS, rows)
