# app/services/api.py

import os
import requests

# Base URL of the FastAPI backend
FASTAPI_URL = os.getenv("FASTAPI_URL", "http://localhost:4000")

# Name of the identity cookie set by /login
TOKEN_COOKIE = "token"


def _error(res):
    try:
        detail = res.json().get("detail")
    except ValueError:
        detail = None
    return {"error": detail or f"Error: Status {res.status_code}"}


def _auth(token):
    return {TOKEN_COOKIE: token} if token else {}


# -------------------------------
# Authentication-related functions
# -------------------------------

def register_user(username, password):
    try:
        res = requests.post(
            f"{FASTAPI_URL}/register",
            json={"username": username, "password": password},
        )
    except requests.RequestException as e:
        return {"error": str(e)}
    return res.json() if res.status_code == 200 else _error(res)


def login_user(username, password):
    """
    Logs in a user. On success returns the identity plus the token taken
    from the identity cookie, so the client can keep it across reruns.
    """
    try:
        res = requests.post(
            f"{FASTAPI_URL}/login",
            json={"username": username, "password": password},
        )
    except requests.RequestException as e:
        return {"error": str(e)}
    if res.status_code != 200:
        return _error(res)

    data = res.json()
    data["token"] = res.cookies.get(TOKEN_COOKIE)
    return data


def get_profile(token):
    """
    Returns {id, username} for a stored token, or None if it is no longer valid.
    """
    try:
        res = requests.get(f"{FASTAPI_URL}/profile", cookies=_auth(token))
    except requests.RequestException:
        return None
    return res.json() if res.status_code == 200 else None


def logout_user(token):
    try:
        requests.post(f"{FASTAPI_URL}/logout", cookies=_auth(token))
    except requests.RequestException:
        pass


# -------------------------
# Posts
# -------------------------

def list_posts():
    try:
        res = requests.get(f"{FASTAPI_URL}/post")
    except requests.RequestException as e:
        return {"error": str(e)}
    return res.json() if res.status_code == 200 else _error(res)


def get_post(post_id):
    try:
        res = requests.get(f"{FASTAPI_URL}/post/{post_id}")
    except requests.RequestException as e:
        return {"error": str(e)}
    return res.json() if res.status_code == 200 else _error(res)


def create_post(token, title, summary, content, file_obj):
    files = {"file": (file_obj.name, file_obj.getvalue(), file_obj.type)}
    data = {"title": title, "summary": summary, "content": content}
    try:
        res = requests.post(f"{FASTAPI_URL}/post", data=data, files=files, cookies=_auth(token))
    except requests.RequestException as e:
        return {"error": str(e)}
    return res.json() if res.status_code == 200 else _error(res)


def update_post(token, post_id, title, summary, content, file_obj=None):
    """
    Sends the edited fields; the cover is only uploaded if a new file was chosen.
    """
    data = {"title": title, "summary": summary, "content": content}
    files = None
    if file_obj is not None:
        files = {"file": (file_obj.name, file_obj.getvalue(), file_obj.type)}
    try:
        res = requests.put(
            f"{FASTAPI_URL}/post/{post_id}",
            data=data,
            files=files,
            cookies=_auth(token),
        )
    except requests.RequestException as e:
        return {"error": str(e)}
    return res.json() if res.status_code == 200 else _error(res)


def get_cover_url(cover):
    """
    Constructs a URL for a post's cover image.
    """
    return f"{FASTAPI_URL}/{cover}"
