"""NiceGUI chat interface with SSE streaming support."""

import logging

from nicegui import app, ui

from assistant_chat.chat.references import link_references, unique_references
from assistant_chat.chat.session import REMEDIATION_STEPS, ChatSession
from assistant_chat.models.schemas import Message, Role
from assistant_chat.ui.api_client import ApiClient, load_assistant_state
from assistant_chat.ui.config import get_ui_config
from assistant_chat.ui.formatting import markdown_to_html
from assistant_chat.ui.preferences import load_dark_mode, toggle_dark_mode

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Lato:wght@400;700&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Lato', sans-serif; }

    .message-user {
        background: #003f72;
        color: white;
        border-radius: 12px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #374151;
        border-radius: 12px;
    }
    .body--dark .message-assistant { background: #374151; color: #d1d5db; }

    .chat-title { color: #003f72; }
    .body--dark .chat-title { color: #eaab00; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #003f72;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .message-assistant pre { margin: 0.5rem 0; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""


def _time_label(message: Message) -> str:
    return message.timestamp.astimezone().strftime("%I:%M %p")


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    config = get_ui_config()
    api = ApiClient(config.api_base_url)

    storage = app.storage.user
    dark = ui.dark_mode(value=load_dark_mode(storage))

    session = ChatSession(
        show_assistant_files=config.show_assistant_files,
        show_citations=config.show_citations,
    )

    # Bubble of the message currently streaming, updated in place per delta
    live_bubble: dict[str, ui.html] = {}

    body: ui.column
    messages_container: ui.column | None = None
    files_container: ui.column | None = None
    input_field: ui.input | None = None
    send_btn: ui.button | None = None

    def render_typing() -> None:
        with ui.row().classes("gap-1 py-1"):
            for _ in range(3):
                ui.element("div").classes("typing-dot")

    def render_citations(message: Message) -> None:
        cited = unique_references(message.references or ())
        references = link_references(cited, session.files)
        with ui.column().classes("mt-2 gap-1"):
            for ref in references:
                if ref.url:
                    ui.link(ref.name, ref.url, new_tab=True).classes(
                        "text-blue-600 hover:underline text-xs"
                    )
                else:
                    ui.label(ref.name).classes("text-blue-600 text-xs")

    def render_message(message: Message) -> None:
        is_user = message.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        icon = "person" if is_user else "smart_toy"

        with ui.row().classes(f"w-full {align} gap-2 items-start no-wrap"):
            if not is_user:
                ui.icon(icon).classes("text-2xl")
            with ui.column().classes("max-w-[80%] gap-1"):
                with ui.element("div").classes(f"px-4 py-2 {bubble}"):
                    if is_user:
                        content = markdown_to_html(message.content)
                        ui.html(content, sanitize=False).classes("text-sm break-words")
                    elif message.streaming and not message.content:
                        render_typing()
                    else:
                        label = ui.html(
                            markdown_to_html(message.content), sanitize=False
                        ).classes("text-sm break-words")
                        if message.streaming:
                            live_bubble[message.id] = label
                    if message.references and session.show_citations:
                        render_citations(message)
                ui.label(_time_label(message)).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
            if is_user:
                ui.icon(icon).classes("text-2xl")

    def refresh_messages() -> None:
        if messages_container is None:
            return
        live_bubble.clear()
        messages_container.clear()
        with messages_container:
            if not session.store.messages:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Start a conversation").classes("text-lg text-gray-400")
            else:
                for message in session.store.messages:
                    render_message(message)

    def on_transcript_change() -> None:
        last = session.store.last
        label = live_bubble.get(last.id) if last is not None else None
        if last is not None and last.streaming and last.content and label is not None:
            label.set_content(markdown_to_html(last.content))
        else:
            refresh_messages()

    session.store.on_change = on_transcript_change

    def refresh_files() -> None:
        if files_container is None:
            return
        referenced = {ref.name for ref in session.referenced_files}
        files_container.clear()
        with files_container:
            ui.label("Assistant Files").classes("text-lg font-semibold")
            if not session.files:
                ui.label("No files found").classes("text-sm text-gray-400")
            for f in session.files:
                highlight = "font-bold text-[#003f72]" if f.name in referenced else ""
                with ui.row().classes("items-center gap-2"):
                    ui.icon("description").classes("text-gray-500")
                    if f.signed_url:
                        ui.link(f.name, f.signed_url, new_tab=True).classes(
                            f"text-sm {highlight}"
                        )
                    else:
                        ui.label(f.name).classes(f"text-sm {highlight}")

    def set_input_enabled(enabled: bool) -> None:
        if input_field is None or send_btn is None:
            return
        if enabled:
            input_field.enable()
            send_btn.enable()
            send_btn.set_text("Send")
        else:
            input_field.disable()
            send_btn.disable()
            send_btn.set_text("Streaming...")

    async def send_message() -> None:
        if input_field is None:
            return
        text = input_field.value or ""
        if not text.strip() or session.is_streaming:
            return

        input_field.value = ""
        set_input_enabled(False)
        try:
            await session.submit(text, api.stream_chat)
        finally:
            set_input_enabled(True)
            refresh_messages()
            refresh_files()

        if session.error:
            ui.notify(session.error, type="negative")

    def render_error_box() -> None:
        with (
            ui.element("div")
            .classes("w-full bg-red-100 border-l-4 border-red-500 text-red-700 p-4 rounded-md")
            .bind_visibility_from(session, "error", backward=bool)
        ):
            with ui.row().classes("items-center gap-2"):
                ui.icon("error")
                ui.label("Error").classes("font-semibold")
            ui.label().bind_text_from(session, "error").classes("mt-2")

    def build_chat() -> None:
        nonlocal messages_container, files_container, input_field, send_btn

        with ui.row().classes("items-center gap-2"):
            ui.label(config.title).classes("chat-title text-2xl font-bold")
            ui.icon("chat").classes("chat-title text-2xl")
            if session.assistant_name:
                ui.label(session.assistant_name).classes("text-sm text-gray-500")

        with ui.scroll_area().classes("w-full h-[calc(100vh-14rem)] rounded-lg shadow-lg"):
            messages_container = ui.column().classes("w-full gap-3 p-4")
        refresh_messages()

        with ui.row().classes("w-full gap-2 items-center no-wrap"):
            input_field = (
                ui.input(placeholder="Type your message")
                .props("outlined dense")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send_message)
            )
            send_btn = ui.button("Send", on_click=send_message).props("unelevated")

        render_error_box()

        if session.show_assistant_files:
            files_container = ui.column().classes("w-full gap-1 p-4 rounded-lg shadow")
            refresh_files()

    def build_setup() -> None:
        with ui.element("div").classes(
            "max-w-2xl bg-red-100 border-l-4 border-red-500 text-red-700 p-4 rounded-md"
        ):
            with ui.row().classes("items-center gap-2"):
                ui.icon("error")
                ui.label("Error").classes("font-semibold")
            ui.label(session.error).classes("mt-2")
            ui.label("To resolve this issue:").classes("mt-4 text-sm font-semibold")
            with ui.element("ol").classes("list-decimal list-inside mt-2 text-sm"):
                for step in REMEDIATION_STEPS:
                    with ui.element("li"):
                        ui.label(step).classes("inline")

    async def initialize() -> None:
        await load_assistant_state(api, session)

        body.clear()
        with body:
            if session.view == "chat":
                build_chat()
            else:
                build_setup()

    def on_toggle_dark() -> None:
        dark.value = toggle_dark_mode(storage, bool(dark.value))
        toggle_btn.props(f"icon={'light_mode' if dark.value else 'dark_mode'}")

    # === UI Layout ===
    toggle_btn = (
        ui.button(icon="light_mode" if dark.value else "dark_mode", on_click=on_toggle_dark)
        .props("flat round")
        .classes("absolute top-4 right-4")
    )

    with ui.column().classes("w-full max-w-6xl mx-auto p-4 sm:p-8 items-center") as body:
        with ui.column().classes("items-center gap-4 mt-32"):
            ui.spinner(size="3em")
            ui.label("Connecting to your Assistant...").classes("text-gray-500")

    ui.timer(0.1, initialize, once=True)
