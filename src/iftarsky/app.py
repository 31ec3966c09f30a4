"""IftarSky: Streamlit preview of the countdown wallpaper."""

import datetime
import html

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()

from iftarsky.compute import local_now  # noqa: E402
from iftarsky.config import DEVICE_SIZES, device_size, load_settings  # noqa: E402
from iftarsky.formatting import format_date_label  # noqa: E402
from iftarsky.geometry import DOT_LAYOUTS  # noqa: E402
from iftarsky.i18n import t  # noqa: E402
from iftarsky.models import WallpaperInput  # noqa: E402
from iftarsky.renderers.fonts import FontCache  # noqa: E402
from iftarsky.renderers.static import render_png  # noqa: E402
from iftarsky.renderers.svg import render_svg_text  # noqa: E402
from iftarsky.scene import assemble_scene  # noqa: E402

_settings = load_settings()
_lang = _settings.lang

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☾",
    layout="wide",
)


@st.cache_resource
def _font_cache() -> FontCache:
    # One cache per server process, shared by every session
    return FontCache()


# --- Session state initialization ---

try:
    _local = local_now(_settings.tz)
except ValueError as e:
    st.error(t("error_input", _lang).format(error=html.escape(str(e))))
    st.stop()

if "now" not in st.session_state:
    st.session_state.now = datetime.time(_local.hour, _local.minute)

# --- Dark theme CSS ---
st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #020817 !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    [data-testid="stSidebar"] {
        background-color: #040D28 !important;
    }
    [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Input panel ---
with st.sidebar:
    now_val = st.time_input(t("label_now", _lang), value=st.session_state.now, step=60)
    suhoor_val = st.time_input(
        t("label_suhoor", _lang), value=datetime.time(4, 28), step=60
    )
    iftar_val = st.time_input(
        t("label_iftar", _lang), value=datetime.time(18, 10), step=60
    )
    day = st.number_input(t("label_day", _lang), min_value=1, max_value=30, value=1)
    city = st.text_input(t("label_city", _lang), value=_settings.city)
    models = [m for m in DEVICE_SIZES if m != "default"]
    model = st.selectbox(
        t("label_model", _lang),
        models,
        index=models.index(_settings.model) if _settings.model in models else 0,
    )
    layouts = list(DOT_LAYOUTS)
    layout = st.radio(
        t("label_layout", _lang),
        layouts,
        index=layouts.index(_settings.dot_layout)
        if _settings.dot_layout in layouts
        else 0,
        horizontal=True,
    )

st.session_state.now = now_val
width, height = device_size(model)
query = WallpaperInput(
    now_hour=now_val.hour,
    now_minute=now_val.minute,
    suhoor_end_hour=suhoor_val.hour,
    suhoor_end_minute=suhoor_val.minute,
    iftar_start_hour=iftar_val.hour,
    iftar_start_minute=iftar_val.minute,
    current_day=int(day),
    canvas_width=width,
    canvas_height=height,
    location_label=city,
    date_label=format_date_label(_local.date()),
)

try:
    scene = assemble_scene(query, dot_layout=layout, lang=_lang)
except ValueError as e:
    st.error(t("error_input", _lang).format(error=html.escape(str(e))))
    st.stop()

# --- Wallpaper preview ---
svg_text = render_svg_text(scene)
_, col, _ = st.columns([1, 2, 1])
with col:
    # Scale the phone-sized SVG down to the column; iframe height keeps the aspect
    preview_w = 360
    fluid_svg = svg_text.replace("<svg ", '<svg style="width:100%;height:auto" ', 1)
    components.html(
        f"<div style='width:{preview_w}px;margin:0 auto'>{fluid_svg}"
        "</div>",
        height=int(preview_w * height / width) + 16,
        scrolling=False,
    )
    stamp = f"{query.now_hour:02d}_{query.now_minute:02d}"
    base_name = f"{city or 'wallpaper'}__{stamp}".replace(" ", "_")
    dcol1, dcol2 = st.columns(2)
    with dcol1:
        st.download_button(
            t("btn_save_png", _lang),
            data=render_png(scene, font_cache=_font_cache()),
            file_name=f"{base_name}.png",
            mime="image/png",
            use_container_width=True,
        )
    with dcol2:
        st.download_button(
            t("btn_save_svg", _lang),
            data=svg_text.encode("utf-8"),
            file_name=f"{base_name}.svg",
            mime="image/svg+xml",
            use_container_width=True,
        )
