"""Cache key generation logic."""


def team_weights_key(team_id: str) -> str:
    """
    Cache key for a team's resolved credit weights.

    Example:
        >>> team_weights_key("t-eng")
        'team:t-eng:weights'
    """
    return f"team:{team_id}:weights"


def user_multiplier_key(user_id: str) -> str:
    """
    Cache key for a user's resolved performance multiplier.

    Example:
        >>> user_multiplier_key("u-42")
        'user:u-42:multiplier'
    """
    return f"user:{user_id}:multiplier"
