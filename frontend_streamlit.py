import streamlit as st
import pandas as pd
import requests
import base64

from config import API_BASE_URL

# ========================
# CONFIG
# ========================
BASE_URL = API_BASE_URL
EMPTY_CELL = "—"

st.set_page_config(
    page_title="Excel AI Analyzer",
    layout="wide"
)

# ========================
# STATE VARIABLES
# ========================
if "session_id" not in st.session_state:
    st.session_state.session_id = requests.post(f"{BASE_URL}/session").json()["session_id"]

if "file_name" not in st.session_state:
    st.session_state.file_name = ""


def show_notification(notification):
    if not notification:
        return
    text = f"**{notification['title']}**: {notification['description']}"
    if notification["severity"] == "error":
        st.error(text)
    else:
        st.success(text)


def show_error(resp):
    try:
        detail = resp.json().get("detail", resp.text)
    except ValueError:
        detail = resp.text
    st.error(f"**Error**: {detail}")


def refresh_summary():
    resp = requests.get(f"{BASE_URL}/session/{st.session_state.session_id}")
    if resp.status_code == 404:
        # Backend restarted: start over with a fresh session
        st.session_state.session_id = requests.post(f"{BASE_URL}/session").json()["session_id"]
        st.session_state.file_name = ""
        return refresh_summary()
    return resp.json()


summary = refresh_summary()

# Notifications raised right before a rerun
show_notification(st.session_state.pop("flash", None))

# Header
title_col, file_col = st.columns([4, 1])
with title_col:
    st.title("Excel AI Analyzer")
    st.caption("Data analysis with an AI command line")
with file_col:
    if summary["file_name"]:
        st.markdown(f"📄 `{summary['file_name']}`")

# 1. FILE UPLOAD
if summary["phase"] == "empty":
    st.header("Upload an Excel file")

    uploaded_files = st.file_uploader(
        "Drop .xlsx or .xls files here, or browse",
        accept_multiple_files=True,
    )

    if uploaded_files and st.button("Process file"):
        with st.spinner("Processing..."):
            files = [("files", (f.name, f.getvalue())) for f in uploaded_files]
            resp = requests.post(
                f"{BASE_URL}/upload/drop",
                files=files,
                data={"session_id": st.session_state.session_id},
            )

            if resp.status_code != 200:
                show_error(resp)
            else:
                data = resp.json()
                st.session_state.file_name = data["session"]["file_name"]
                st.session_state.flash = data["notification"]
                st.rerun()

    st.stop()

table_col, command_col = st.columns([2, 1])

# 2. TABLE + CHARTS
with table_col:
    head_col, close_col = st.columns([4, 1])
    with head_col:
        st.subheader("Table data")
    with close_col:
        if st.button("Close"):
            requests.post(f"{BASE_URL}/session/{st.session_state.session_id}/close")
            st.session_state.file_name = ""
            st.rerun()

    preview = requests.post(
        f"{BASE_URL}/data/preview",
        json={"session_id": st.session_state.session_id, "n_rows": summary["n_rows"]},
    ).json()

    df_prev = pd.DataFrame(
        [[EMPTY_CELL if cell is None else str(cell) for cell in row] for row in preview["rows"]],
        columns=preview["headers"],
    )
    st.dataframe(df_prev, use_container_width=True, height=300)

    st.subheader("Visualization")
    tabs = st.tabs(["Bars", "Lines", "Pie"])

    for tab, chart_type in zip(tabs, ["bar", "line", "pie"]):
        with tab:
            spec = requests.post(
                f"{BASE_URL}/data/charts",
                json={
                    "session_id": st.session_state.session_id,
                    "chart_type": chart_type,
                    "render": True,
                },
            ).json()

            if spec.get("image_base64"):
                st.image(base64.b64decode(spec["image_base64"]), use_container_width=True)

# 3. COMMAND LINE + HISTORY
with command_col:
    st.subheader("AI command line")

    with st.form("command_form", clear_on_submit=True):
        command = st.text_input("Command", placeholder="Type a command for the AI...")
        submitted = st.form_submit_button("Send")

    st.caption(
        "Example commands: find the average value · fill data gaps · "
        "show trends · remove duplicates"
    )

    if submitted and command.strip():
        with st.spinner("Processing..."):
            resp = requests.post(
                f"{BASE_URL}/commands/execute",
                json={"session_id": st.session_state.session_id, "command": command},
            )
            if resp.status_code != 200:
                show_error(resp)
            else:
                show_notification(resp.json().get("notification"))

    st.subheader("Request history")

    history = requests.get(f"{BASE_URL}/commands/history/{st.session_state.session_id}").json()

    if not history:
        st.info("History is empty")

    for entry in history:
        with st.container(border=True):
            st.caption(pd.Timestamp(entry["timestamp"]).strftime("%H:%M:%S"))
            st.code(f"$ {entry['command']}", language=None)
            if entry.get("error"):
                st.error(entry["result"])
            else:
                st.text(entry["result"])
