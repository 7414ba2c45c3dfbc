"""
connect4ai.data - Persistence of per-player win/loss/draw statistics
"""

from connect4ai.data.stats_store import (StatsWriteError, UnknownUserError, create_user,
                                         format_username, get_leaderboard, get_or_create_user,
                                         get_user, update_stats)

__all__ = ['StatsWriteError', 'UnknownUserError', 'create_user', 'format_username',
           'get_leaderboard', 'get_or_create_user', 'get_user', 'update_stats']
