# app/ui/posts.py

from datetime import datetime
import streamlit as st
from services.api import get_cover_url, get_post, list_posts


def _format_date(value):
    try:
        return datetime.fromisoformat(value).strftime("%Y-%m-%d %H:%M")
    except (TypeError, ValueError):
        return value or ""


def open_post(post_id):
    st.session_state["page"] = "post"
    st.session_state["post_id"] = post_id


def index_page():
    st.title("📰 Latest posts")

    posts = list_posts()
    if isinstance(posts, dict) and posts.get("error"):
        st.error(posts["error"])
        return

    if not posts:
        st.info("No posts yet.")
        return

    for post in posts:
        cols = st.columns([2, 5])
        with cols[0]:
            st.image(get_cover_url(post["cover"]))
        with cols[1]:
            st.subheader(post["title"])
            st.caption(f"{post['author']['username']} · {_format_date(post['created_at'])}")
            st.write(post["summary"])
            if st.button("Read more", key=f"open_{post['id']}"):
                open_post(post["id"])
                st.rerun()
        st.divider()


def post_page():
    post_id = st.session_state.get("post_id")
    if not post_id:
        st.session_state["page"] = "index"
        st.rerun()

    post = get_post(post_id)
    if post.get("error"):
        st.error(post["error"])
        return

    if st.button("← All posts"):
        st.session_state["page"] = "index"
        st.rerun()

    st.title(post["title"])
    st.caption(f"by @{post['author']['username']} · {_format_date(post['created_at'])}")

    # Only the author gets the edit button; the server enforces the same rule.
    if post["author"]["id"] == st.session_state.get("user_id"):
        if st.button("✏️ Edit this post"):
            st.session_state["page"] = "edit"
            st.rerun()

    st.image(get_cover_url(post["cover"]))
    st.markdown(post["content"])
