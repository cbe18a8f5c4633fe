# Force SQLModel table registration at test discovery time
# This ensures all models are registered before any test database creation
from fixturedesk.models.tournament_document import TournamentDocument  # noqa: F401
