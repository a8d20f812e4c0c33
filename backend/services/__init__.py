from importlib import import_module

__all__ = [
    "talent_client",
    "TalentProtocolClient",
    "leaderboard_service",
    "LeaderboardService",
]

_LAZY_EXPORTS = {
    "talent_client": ("services.talent_client", "talent_client"),
    "TalentProtocolClient": ("services.talent_client", "TalentProtocolClient"),
    "leaderboard_service": ("services.leaderboard.service", "leaderboard_service"),
    "LeaderboardService": ("services.leaderboard.service", "LeaderboardService"),
}


def __getattr__(name):
    if name not in _LAZY_EXPORTS:
        raise AttributeError(f"module 'services' has no attribute {name!r}")

    module_name, attr_name = _LAZY_EXPORTS[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
