"""GitHub API payload builders shared by the tests."""

API = "https://api.github.com"


def account_json(login: str, id: int = 1) -> dict:
    return {
        "login": login,
        "id": id,
        "avatar_url": f"https://avatars.githubusercontent.com/u/{id}",
        "html_url": f"https://github.com/{login}",
        "type": "User",
    }


def user_json(login: str, id: int = 1, **extra) -> dict:
    data = account_json(login, id)
    data.update(
        {
            "name": login.title(),
            "bio": None,
            "followers": 2,
            "following": 1,
            "public_repos": 3,
            "followers_url": f"{API}/users/{login}/followers",
        }
    )
    data.update(extra)
    return data


def repo_json(owner: str, name: str, id: int, **extra) -> dict:
    data = {
        "id": id,
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": account_json(owner),
        "description": f"{name} description",
        "html_url": f"https://github.com/{owner}/{name}",
        "fork": False,
        "language": "Python",
        "stargazers_count": 5,
        "forks_count": 1,
        "watchers_count": 5,
        "open_issues_count": 2,
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2025-01-01T00:00:00Z",
        "issues_url": f"{API}/repos/{owner}/{name}/issues{{/number}}",
        "languages_url": f"{API}/repos/{owner}/{name}/languages",
    }
    data.update(extra)
    return data
