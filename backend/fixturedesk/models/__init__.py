from fixturedesk.models.tournament_document import TournamentDocument

__all__ = [
    "TournamentDocument",
]
