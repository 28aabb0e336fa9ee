# app.py
# Entry point: streamlit run src/app.py
import logging

import streamlit as st

from dashboard import mount
from settings import LOG_LEVEL, MAP_STYLE

# ---------- Global config ----------
st.set_page_config(page_title="Destruction in Gaza stripe", layout="wide")
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

mount(st.container(), map_style=MAP_STYLE)
