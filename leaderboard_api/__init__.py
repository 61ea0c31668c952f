"""Monthly per-device top-20 leaderboard API backed by a Redis sorted set."""
