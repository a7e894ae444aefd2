import pandas as pd
import streamlit as st

from b64kit.codec import convert
from b64kit.config import ConfigError, resolve_config
from b64kit.formats import InputTooLargeError, Selector

FORMAT_LABELS = {
    Selector.AUTO: "Auto Detect",
    Selector.BASE64: "Base64",
    Selector.URL: "URL Encoded",
    Selector.HEX: "Hexadecimal",
    Selector.TEXT: "Plain Text",
}


def _preview(text: str, limit: int) -> str:
    return f"{text[:limit]}..." if len(text) > limit else text


def main() -> None:
    st.set_page_config(page_title="Base64 Toolkit")
    st.title("Base64 Toolkit")
    try:
        cfg = resolve_config()
    except ConfigError as exc:
        st.error(f"Bad B64KIT_* environment override: {exc}")
        return
    st.session_state.setdefault("history", [])

    mode = st.radio("Mode", ["Simple", "Advanced"], horizontal=True)
    selector = Selector.AUTO
    if mode == "Advanced":
        selector = st.selectbox(
            "Format",
            list(FORMAT_LABELS),
            index=list(FORMAT_LABELS).index(cfg.selector),
            format_func=lambda s: FORMAT_LABELS[s],
        )

    label = "Paste anything here" if mode == "Simple" else "Input"
    placeholder = (
        "Paste your text, Base64, URL, or hex here..."
        if mode == "Simple"
        else "Enter your data..."
    )
    text = st.text_area(label, placeholder=placeholder, height=140)
    st.caption(f"{len(text)} characters")

    try:
        outcome = convert(text, selector, max_chars=cfg.max_input_chars)
    except InputTooLargeError as exc:
        st.warning(str(exc))
        return

    if not outcome.ok:
        st.error(outcome.message)
    elif not outcome.is_empty:
        st.markdown(f"**Format detected:** `{outcome.detection_label}`")
        st.success(f"Result: {_preview(outcome.result_text, cfg.preview_chars)}")
        # st.code renders a copy button for the full result.
        st.code(outcome.result_text, language=None)
        entry = {
            "selector": selector.value,
            "input_chars": len(text),
            "format": outcome.resolved_format.value if outcome.resolved_format else None,
            "label": outcome.detection_label,
            "result": _preview(outcome.result_text, 40),
        }
        history = st.session_state["history"]
        if not history or history[-1] != entry:
            history.append(entry)

    if mode == "Simple":
        st.info(
            "Just paste and go! Auto-detects Base64, URL encoding, hex, or plain text. "
            "Plain text is encoded to Base64."
        )
    else:
        st.info("Choose your input format manually for precise control over the conversion.")

    if st.session_state["history"]:
        st.markdown("**Recent conversions**")
        st.dataframe(pd.DataFrame(st.session_state["history"]).tail(5))


if __name__ == "__main__":
    main()
