"""
Error kinds raised by the fixture desk services.

Every service either returns a complete new Tournament/Match value or raises
one of these; a raised error never leaves a half-applied change behind.
Routes translate them to HTTPException.
"""


class FixtureDeskError(ValueError):
    """Base class for all fixture desk errors."""


# ============================================================================
# Fixture generation
# ============================================================================


class InsufficientPlayers(FixtureDeskError):
    """Fewer than the minimum group size of eligible players."""

    def __init__(self, player_count: int, minimum: int):
        self.player_count = player_count
        self.minimum = minimum
        super().__init__(
            f"A minimum of {minimum} players is required to generate fixtures (got {player_count})"
        )


class UnpartitionableCount(FixtureDeskError):
    """Player count cannot be split into groups of allowed size with no remainder."""

    def __init__(self, player_count: int, min_size: int, max_size: int):
        self.player_count = player_count
        super().__init__(
            f"Cannot split {player_count} players into groups of {min_size}-{max_size} "
            f"without a leftover group. Please adjust player count."
        )


class GroupTooSmall(FixtureDeskError):
    """A group needs at least two members to produce any match."""


class InvalidFixture(FixtureDeskError):
    """An uploaded fixture list breaks a key or match invariant."""


# ============================================================================
# Match lifecycle
# ============================================================================


class MissingScores(FixtureDeskError):
    """Direct completion requested while a score is still unset."""

    def __init__(self, match_id: str):
        self.match_id = match_id
        super().__init__("Please enter scores before marking a match as completed.")


class InvalidScoreInput(FixtureDeskError):
    """A score edit carried a non-empty, non-integer value."""

    def __init__(self, raw_value):
        self.raw_value = raw_value
        super().__init__(f"Invalid score value: {raw_value!r}")


class MatchNotFound(FixtureDeskError):
    def __init__(self, match_id: str):
        self.match_id = match_id
        super().__init__(f"Match {match_id} not found")


# ============================================================================
# Tournament document
# ============================================================================


class TournamentNotFound(FixtureDeskError):
    def __init__(self, tournament_id):
        self.tournament_id = tournament_id
        super().__init__(f"Tournament {tournament_id} not found")


class InvalidPlayer(FixtureDeskError):
    """Player registration data failed validation."""


class InvalidImportFile(FixtureDeskError):
    """Player CSV is empty or lacks required headers."""


class DuplicateCategory(FixtureDeskError):
    """Category name already exists in the tournament settings."""


class PublishBlocked(FixtureDeskError):
    """Tournament is not ready to publish."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Cannot publish: {reason}")
