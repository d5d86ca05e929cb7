"""
ClassScout - Course & Professor Assistant
Streamlit Web Application

Entry point for the chat interface. Keeps the conversation in the
Streamlit session and runs one tool-calling exchange per question.
"""

import streamlit as st
import time
from typing import List, Dict, Any, Optional
import logging

from config import LOG_LEVEL

# Configure logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Import services
try:
    from services.chat_service import ChatService, ChatResponse
    from config import GEMINI_MODEL, APP_TITLE, APP_SUBTITLE
except ImportError as e:
    st.error(f"❌ Failed to import required modules: {e}")
    st.stop()

# ============================================================================
# PAGE CONFIGURATION
# ============================================================================

st.set_page_config(
    page_title="ClassScout - Course Assistant",
    page_icon="📚",
    layout="wide",
    initial_sidebar_state="expanded",
)


# ============================================================================
# SESSION STATE
# ============================================================================

def initialize_session_state():
    """Initialize session state variables."""

    if "chat_service" not in st.session_state:
        st.session_state.chat_service = ChatService()

    # Messages shown in the UI
    if "messages" not in st.session_state:
        st.session_state.messages = []

    # Full LLM conversation (including tool calls and results)
    if "conversation" not in st.session_state:
        st.session_state.conversation = []

    if "session_id" not in st.session_state:
        st.session_state.session_id = f"session_{int(time.time())}"


def history_without_system(messages: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Drop the leading system prompt; each exchange adds its own."""
    if messages and messages[0].get("role") == "system":
        return messages[1:]
    return messages


def add_message(role: str, content: str, metadata: Optional[Dict] = None):
    """Add a message to the displayed chat."""
    st.session_state.messages.append({
        "role": role,
        "content": content,
        "metadata": metadata or {},
    })


def render_chat_message(message: Dict[str, Any]):
    """Render a single chat message."""
    with st.chat_message(message["role"], avatar="👤" if message["role"] == "user" else "📚"):
        st.text(message["content"])
        tools_used = message.get("metadata", {}).get("tools_used")
        if tools_used:
            st.caption(f"🔧 Looked up: {', '.join(tools_used)}")


def handle_user_input(user_message: str):
    """Run one exchange for the user's message."""
    add_message("user", user_message)

    with st.spinner("🔍 Looking that up..."):
        response: ChatResponse = st.session_state.chat_service.process_message(
            user_message=user_message,
            conversation_history=history_without_system(st.session_state.conversation),
            session_id=st.session_state.session_id,
        )

    if response.success:
        conversation = list(response.messages)
        conversation.append({"role": "assistant", "content": response.message})
        st.session_state.conversation = conversation

    add_message("assistant", response.message, response.metadata)


# ============================================================================
# SIDEBAR
# ============================================================================

def render_sidebar():
    """Render the sidebar with session details."""
    with st.sidebar:
        st.markdown(f"### {APP_TITLE}")
        st.caption(APP_SUBTITLE)
        st.divider()

        st.caption(f"**Model:** {GEMINI_MODEL}")
        st.caption(f"**Chat History:** {len(st.session_state.messages)} msgs")
        st.caption(f"**Session ID:** {st.session_state.session_id[:16]}")

        if st.button("🗑️ Clear conversation", use_container_width=True):
            st.session_state.messages = []
            st.session_state.conversation = []
            st.rerun()


# ============================================================================
# MAIN APP
# ============================================================================

def main():
    """Main application entry point."""
    initialize_session_state()
    render_sidebar()

    st.title(APP_TITLE)
    st.markdown(f"#### {APP_SUBTITLE}")

    for message in st.session_state.messages:
        render_chat_message(message)

    user_input = st.chat_input("Ask about a course or professor...", key="chat_input")

    if user_input:
        handle_user_input(user_input)
        st.rerun()

    if len(st.session_state.messages) == 0:
        st.markdown("---")
        st.markdown("### 💡 Example Questions:")

        col1, col2 = st.columns(2)
        with col1:
            if st.button("👩‍🏫 Who teaches CS101?", use_container_width=True):
                handle_user_input("Who teaches CS101?")
                st.rerun()
        with col2:
            if st.button("⭐ Best-rated database professor", use_container_width=True):
                handle_user_input("Which database course has the best-rated professor?")
                st.rerun()


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        logger.error(f"Application error: {e}", exc_info=True)
        st.error(f"❌ **Application Error**\n\nAn unexpected error occurred: {str(e)}")
