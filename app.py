import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from the .env file next to this script
current_dir = Path(__file__).resolve().parent
load_dotenv(current_dir / '.env')

import streamlit as st

from utils.settings_manager import get_setting
from utils.identity import get_current_user, login, logout

# Configure logging once for the whole app
logging.basicConfig(
    level=get_setting('LOGGING', 'level'),
    format=get_setting('LOGGING', 'format')
)

st.set_page_config(page_title="Study Portal", page_icon="🎓", layout="wide")

# Define pages
home_page = st.Page(page="views/home_page.py", title="Home", icon="🏠", default=True)
resources_page = st.Page(page="views/resources_page.py", title="Resources", icon="📚")
resource_detail_page = st.Page(page="views/resource_detail_page.py", title="Resource Details", icon="🔎",
                               url_path="resource")
tests_page = st.Page(page="views/tests_page.py", title="Tests", icon="📝")
ocr_page = st.Page(page="views/ocr_page.py", title="OCR", icon="🔍")

upload_page = st.Page(page="views/upload_page.py", title="Upload", icon="⬆️")
create_test_page = st.Page(page="views/create_test_page.py", title="Create Test", icon="✏️")
dashboard_page = st.Page(page="views/dashboard_page.py", title="Dashboard", icon="📊")
profile_page = st.Page(page="views/profile_page.py", title="Profile", icon="👤")

public_pages = [home_page, resources_page, resource_detail_page, tests_page, ocr_page]
member_pages = [upload_page, create_test_page, dashboard_page, profile_page]

user = get_current_user()

# Sidebar sign-in state
with st.sidebar:
    if user:
        st.caption(f"Signed in as {user['email'] or user['name']}")
        st.button("Sign out", icon="🚪", on_click=logout)
    elif st.button("Sign in", icon="🔑"):
        try:
            login()
        except RuntimeError as e:
            st.error(str(e))

# Setup navigation
pages = {"Portal": public_pages}
if user:
    pages["My Account"] = member_pages

nav = st.navigation(pages)
nav.run()
