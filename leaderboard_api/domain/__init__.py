"""Domain layer (pure logic).

- Keep leaderboard rules and calculations here.
- Avoid I/O: no Redis, no HTTP/FastAPI.
- Time is passed in as an argument, never read with datetime.now().
"""
