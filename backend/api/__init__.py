from .routes_leaderboard import router

__all__ = ["router"]
