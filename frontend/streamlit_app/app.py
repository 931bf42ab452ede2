import os, requests, streamlit as st
import pandas as pd

API = os.getenv("API_URL", "http://localhost:8000/api")

DEMO_QUERIES = {
    "Sales by Region": "Show me total sales by region",
    "Top Customers": "Show me the top 5 customers by sales",
    "Product Performance": "Show me sales for each product",
    "Q4 2024 Data": "Show me sales performance by region for Q4 2024",
}

def api(method: str, path: str, **kwargs):
    r = requests.request(method, f"{API}{path}", timeout=120, **kwargs)
    body = r.json()
    if r.status_code >= 400:
        st.error(body.get("error", r.text) if isinstance(body, dict) else r.text)
        return None
    return body

st.set_page_config(page_title="QueryCraft", layout="wide")
st.title("QueryCraft: ask your data")

st.session_state.setdefault("question", "")
st.session_state.setdefault("sql", "")
st.session_state.setdefault("result", None)
st.session_state.setdefault("translation", None)

with st.sidebar:
    status = api("GET", "/database/status")
    if status:
        st.caption(f"Connected: {status['name']}")

    st.subheader("History")
    show_saved = st.toggle("Saved only", value=False)
    history = api("GET", "/queries/saved" if show_saved else "/queries") or []
    for q in history:
        label = q.get("title") or q["naturalLanguage"]
        with st.expander(("★ " if q["isSaved"] else "") + label):
            st.code(q["sqlQuery"], language="sql")
            c1, c2, c3 = st.columns(3)
            if c1.button("Load", key=f"load-{q['id']}"):
                st.session_state.question = q["naturalLanguage"]
                st.session_state.sql = q["sqlQuery"]
                st.rerun()
            if c2.button("Unsave" if q["isSaved"] else "Save", key=f"save-{q['id']}"):
                api("PATCH", f"/queries/{q['id']}", json={"isSaved": not q["isSaved"]})
                st.rerun()
            if c3.button("Delete", key=f"del-{q['id']}"):
                api("DELETE", f"/queries/{q['id']}")
                st.rerun()
    if history and st.button("Clear history"):
        cleared = api("DELETE", "/queries")
        if cleared:
            st.success(f"Removed {cleared['deleted']} entries")
        st.rerun()

st.subheader("Try these sample queries")
cols = st.columns(len(DEMO_QUERIES))
for col, (title, text) in zip(cols, DEMO_QUERIES.items()):
    if col.button(title, use_container_width=True):
        st.session_state.question = text

with st.form("translate"):
    question = st.text_area("Ask a question about your data", key="question")
    if st.form_submit_button("Generate SQL"):
        if not question.strip():
            st.warning("Please enter a question.")
        else:
            translation = api("POST", "/translate", json={"naturalLanguage": question})
            if translation:
                st.session_state.translation = translation
                st.session_state.sql = translation["sqlQuery"]

translation = st.session_state.translation
if translation:
    st.info(f"{translation['explanation']} (confidence {translation['confidence']:.0%})")

sql = st.text_area("SQL", key="sql", height=120)
title = st.text_input("Title (optional)")
c1, c2, c3 = st.columns(3)
if c1.button("Run query", type="primary", use_container_width=True) and sql.strip():
    st.session_state.result = api(
        "POST", "/execute",
        json={"sqlQuery": sql, "naturalLanguage": st.session_state.question or None, "title": title or None},
    )
if c2.button("Explain", use_container_width=True) and sql.strip():
    explained = api("POST", "/explain", json={"sqlQuery": sql})
    if explained:
        st.markdown(explained["explanation"])
if c3.button("Optimize", use_container_width=True) and sql.strip():
    optimized = api("POST", "/optimize", json={"sqlQuery": sql})
    if optimized:
        st.code(optimized["optimizedQuery"], language="sql")
        for item in optimized["improvements"]:
            st.write(f"- {item}")

result = st.session_state.result
if result:
    if not result["success"]:
        st.error(f"Query failed: {result['error']}")
    elif not result["data"]:
        st.info(f"No results ({result['executionTime']} ms).")
    else:
        st.caption(f"{result['rowCount']} rows in {result['executionTime']} ms")
        df = pd.DataFrame(result["data"], columns=result["columns"])
        st.dataframe(df, use_container_width=True)

        e1, e2 = st.columns(2)
        for col, fmt in ((e1, "csv"), (e2, "json")):
            r = requests.post(f"{API}/export/{fmt}", json={"data": result["data"], "filename": "query-results"}, timeout=120)
            if r.ok:
                col.download_button(f"Download {fmt.upper()}", data=r.content, file_name=f"query-results.{fmt}")

        st.subheader("Chart")
        chart_type = st.selectbox("Chart type", ["bar", "line", "pie", "scatter"])
        x_axis = st.selectbox("X axis", result["columns"])
        y_axis = st.selectbox("Y axis", result["columns"], index=min(1, len(result["columns"]) - 1))
        chart_title = st.text_input("Chart title", value=title or "Query results")
        if chart_type == "bar":
            st.bar_chart(df, x=x_axis, y=y_axis)
        elif chart_type == "line":
            st.line_chart(df, x=x_axis, y=y_axis)
        elif chart_type == "scatter":
            st.scatter_chart(df, x=x_axis, y=y_axis)
        else:
            st.vega_lite_chart(df, {
                "mark": {"type": "arc"},
                "encoding": {
                    "theta": {"field": y_axis, "type": "quantitative"},
                    "color": {"field": x_axis, "type": "nominal"},
                },
            })

        # Full history, not the sidebar list, which may be saved-only.
        recent = api("GET", "/queries") or []
        matching = [q for q in recent if q["sqlQuery"] == sql]
        if matching and st.button("Save & share chart"):
            viz = api("POST", "/visualizations", json={
                "queryId": matching[0]["id"], "chartType": chart_type,
                "xAxis": x_axis, "yAxis": y_axis, "title": chart_title,
            })
            if viz:
                st.success(f"Share link: {API}/share/{viz['shareableId']}")
