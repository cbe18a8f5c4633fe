from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from sqlmodel import Session

from fixturedesk.database import get_session
from fixturedesk.services import exports
from fixturedesk.utils.document_guards import require_tournament

router = APIRouter()

_EXPORTERS = {
    "players": exports.export_players_csv,
    "fixtures": exports.export_fixtures_csv,
    "match-results": exports.export_match_results_csv,
}


@router.get("/tournaments/{tournament_id}/exports/{kind}.csv", response_class=PlainTextResponse)
def export_csv(tournament_id: str, kind: str, session: Session = Depends(get_session)):
    """CSV download: players, fixtures or match-results"""
    exporter = _EXPORTERS.get(kind)
    if exporter is None:
        raise HTTPException(status_code=404, detail=f"Unknown export: {kind}")
    tournament = require_tournament(session, tournament_id)
    filename = f"{kind.replace('-', '_')}_data.csv" if kind != "match-results" else "match_results.csv"
    return PlainTextResponse(
        exporter(tournament),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
