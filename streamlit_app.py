"""
Brick Mosaic - web front end

Run with:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import io
import zipfile

import numpy as np
import streamlit as st
from PIL import Image

from brick_mosaic.config import BrickConfig
from brick_mosaic.errors import BrickMosaicError
from brick_mosaic.image_io import load_image
from brick_mosaic.palette import parse_palette
from brick_mosaic.pipeline import build_mosaic, palette_usage

# -- Page config -------------------------------------------------------
st.set_page_config(
    page_title="Brick Mosaic",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="collapsed",
)

_DEFAULTS = BrickConfig()


def _to_png(array: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(array).save(buf, format="PNG")
    return buf.getvalue()


def _hex(color: tuple[int, int, int]) -> str:
    return "#{:02X}{:02X}{:02X}".format(*color)


# -- Title -------------------------------------------------------------
st.title("Brick Mosaic")
st.caption(
    "Upload an image to turn it into a stud mosaic using a fixed set of "
    "brick colours, split into square build plates."
)

# -- Controls ----------------------------------------------------------
c1, c2, c3 = st.columns(3)
with c1:
    cell_size = st.slider("Studs per plate", 4, 32, _DEFAULTS.cell_size)
with c2:
    pallets = st.slider("Plates per side", 1, 6, _DEFAULTS.pallets_per_canvas)
with c3:
    stud_size = st.slider("Stud pixels", 6, 40, _DEFAULTS.stud_size)

palette_text = st.text_input(
    "Palette (hex, first colour fills empty cells)",
    ", ".join(_hex(c) for c in _DEFAULTS.palette),
)

uploaded = st.file_uploader(
    "Select image", type=["jpg", "jpeg", "png", "webp", "bmp"],
)

if uploaded is not None:
    try:
        original = load_image(uploaded)
        cfg = BrickConfig(
            cell_size=cell_size,
            pallets_per_canvas=pallets,
            stud_size=stud_size,
            border=max(1, stud_size // 10),
            palette=parse_palette(h for h in palette_text.split(",") if h.strip()),
        )
        result = build_mosaic(original, cfg)
    except BrickMosaicError as exc:
        st.error(str(exc))
        st.stop()

    st.image(result.canvas, caption="Canvas", use_container_width=True)

    p1, p2 = st.columns(2)
    p1.image(
        Image.fromarray(result.averages).resize((240, 240), Image.NEAREST),
        caption="Average colours",
    )
    p2.image(
        Image.fromarray(result.adapted).resize((240, 240), Image.NEAREST),
        caption="Adapted colours",
    )

    st.subheader("Studs per colour")
    cols = st.columns(len(cfg.palette))
    for col, (color, count) in zip(cols, palette_usage(result.adapted, cfg.palette).items(), strict=False):
        col.markdown(
            f'<div style="background:{_hex(color)};height:24px;border:1px solid #ccc;"></div>',
            unsafe_allow_html=True,
        )
        col.metric(_hex(color), count)

    st.subheader("Plates")
    for j in range(cfg.pallets_per_canvas):
        row = st.columns(cfg.pallets_per_canvas)
        for i in range(cfg.pallets_per_canvas):
            row[i].image(result.tiles[(i, j)], caption=f"pallet {i}{j}")

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("canvas.png", _to_png(result.canvas))
        for (i, j), tile in sorted(result.tiles.items()):
            zf.writestr(f"pallet_{i}{j}.png", _to_png(tile))
    st.download_button(
        "Download plates",
        data=buf.getvalue(),
        file_name="brick_mosaic.zip",
        mime="application/zip",
        use_container_width=True,
    )
