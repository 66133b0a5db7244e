# app/ui/login.py

import os
import streamlit as st
from dotenv import load_dotenv
from streamlit_cookies_manager import EncryptedCookieManager
from services.api import get_profile, login_user, logout_user, register_user

load_dotenv()

COOKIE_PASSWORD = os.getenv("COOKIE_PASSWORD")

cookies = EncryptedCookieManager(password=COOKIE_PASSWORD)
if not cookies.ready():
    st.stop()


def restore_session():
    """
    Picks up a token saved in the browser cookie on a previous visit,
    dropping it if the server no longer accepts it.
    """
    if "token" in st.session_state or not cookies.get("token"):
        return

    profile = get_profile(cookies["token"])
    if profile is None:
        del cookies["token"]
        cookies.save()
        return

    st.session_state["token"] = cookies["token"]
    st.session_state["user_id"] = profile["id"]
    st.session_state["username"] = profile["username"]


def logout():
    logout_user(st.session_state.get("token"))
    if "token" in cookies:
        del cookies["token"]
        cookies.save()


def login_page():
    st.title("🔐 Login")

    if "show_register" not in st.session_state:
        st.session_state["show_register"] = False

    if st.session_state["show_register"]:
        show_register_form()
    else:
        show_login_form()


def show_login_form():
    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login")

    if submitted:
        with st.spinner("Logging in..."):
            result = login_user(username, password)
            if result.get("error"):
                st.error(f"❌ Login failed: {result['error']}")
            else:
                st.session_state["token"] = result["token"]
                st.session_state["user_id"] = result["id"]
                st.session_state["username"] = result["username"]
                st.session_state["page"] = "index"
                cookies["token"] = result["token"]
                cookies.save()
                st.rerun()

    if st.button("Register"):
        st.session_state["show_register"] = True
        st.rerun()


def show_register_form():
    st.subheader("📝 Register")

    new_user = st.text_input("Username", key="new_user")
    new_pass = st.text_input("Password", type="password", key="new_pass")

    if st.button("Create account"):
        with st.spinner("Registering..."):
            result = register_user(new_user, new_pass)
            if result.get("error"):
                st.error(f"❌ Registration failed: {result['error']}")
            else:
                st.success("🎉 Registration successful! Please log in.")
                st.session_state["show_register"] = False
                st.rerun()

    if st.button("← Back to login"):
        st.session_state["show_register"] = False
        st.rerun()
