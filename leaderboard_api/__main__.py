import uvicorn

from leaderboard_api.load_secrets import host, port

if __name__ == "__main__":
    uvicorn.run("leaderboard_api.main:app", host=host, port=port)
