"""
會議報名系統主應用程式
Conference Registration App
"""
import logging
import streamlit as st

from src.ui.registration_page import render_registration_page
from src.ui.admin_dashboard import render_admin_dashboard
from src.utils.config import configure_logging, get_settings

configure_logging()
logger = logging.getLogger(__name__)


# Streamlit 頁面配置
st.set_page_config(
    page_title=get_settings().conference_name,
    page_icon="🎟️",
    layout="wide",
    initial_sidebar_state="collapsed"
)


def initialize_session_state():
    """初始化 session state 預設值。"""
    if "current_page" not in st.session_state:
        st.session_state.current_page = "register"

    # Handle ?page=admin for a direct dashboard link
    if "url_params_processed" not in st.session_state:
        query_params = st.query_params
        if query_params.get("page") == "admin":
            st.session_state.current_page = "admin"
        st.session_state.url_params_processed = True


def apply_custom_css():
    """套用自訂 CSS 樣式。"""
    st.markdown("""
        <style>
        /* 全域樣式 */
        .stApp {
            background: linear-gradient(135deg, #004E89 0%, #1A1A2E 100%);
        }

        /* 隱藏 Streamlit 預設元素 */
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
        header, [data-testid="stHeader"] {
            visibility: hidden;
            height: 0;
        }

        [data-testid="stAppViewContainer"] > .main .block-container {
            padding-top: 1.5rem;
            max-width: 1200px;
        }

        /* 按鈕樣式 */
        .stButton > button {
            border-radius: 12px;
            font-weight: 600;
            transition: all 0.3s;
        }

        .stButton > button:hover {
            transform: translateY(-2px);
            box-shadow: 0 8px 16px rgba(0, 0, 0, 0.3);
        }

        .stButton > button[kind="primary"] {
            background: linear-gradient(135deg, #FF6B35 0%, #F7B801 100%);
            color: white;
            border: none;
        }

        /* 輸入框樣式 */
        .stTextInput > div > div > input {
            background: #F4F4F9;
            border: 2px solid #e0e0e0;
            border-radius: 8px;
            color: #1A1A2E;
        }

        /* 成功訊息 */
        .stSuccess {
            background: #06D6A050;
            border-left: 4px solid #06D6A0;
            border-radius: 8px;
        }

        /* 錯誤訊息 */
        .stError {
            background: #EF476F50;
            border-left: 4px solid #EF476F;
            border-radius: 8px;
        }
        </style>
    """, unsafe_allow_html=True)


def render_navigation():
    """渲染導航選單。"""
    st.markdown("<div style='margin-bottom: 24px;'></div>", unsafe_allow_html=True)

    nav_col1, _, nav_col3 = st.columns([1, 2.4, 1], gap="small")

    with nav_col1:
        if st.button("🎟️ Register", use_container_width=True, key="nav_register"):
            st.session_state.current_page = "register"

    with nav_col3:
        if st.button("📊 Dashboard", use_container_width=True, key="nav_admin"):
            st.session_state.current_page = "admin"


def render_current_page():
    """根據當前頁面狀態渲染對應內容。"""
    try:
        if st.session_state.current_page == "register":
            render_registration_page()

        elif st.session_state.current_page == "admin":
            render_admin_dashboard()

        else:
            # 未知頁面
            st.error(f"Unknown page: {st.session_state.current_page}")
            if st.button("Back to registration"):
                st.session_state.current_page = "register"
                st.rerun()

    except Exception as e:
        # 錯誤邊界
        logger.exception("Unhandled exception while rendering page")
        st.error("Something went wrong. Please try again later.")

        with st.expander("🔍 Error details"):
            st.code(str(e))

        if st.button("Back to registration"):
            st.session_state.current_page = "register"
            st.rerun()


def main():
    """主應用程式入口。"""
    try:
        initialize_session_state()
        apply_custom_css()

        render_navigation()
        render_current_page()
    except Exception as e:
        logger.exception("Unhandled exception during app execution")
        st.error("The app hit an error. Please reload the page.")
        st.code(str(e))

        if st.button("🔄 Reload"):
            st.session_state.clear()
            st.rerun()


if __name__ == "__main__":
    main()
