"""NiceGUI session page: renders upload and chat controller state."""

import logging

from nicegui import events, ui

from docchat.client.network import NetworkClient
from docchat.config import get_client_config
from docchat.errors import SessionError
from docchat.models.session import Attempt, AttemptStatus, Role, Turn
from docchat.session.chat import ChatController
from docchat.session.picker import FileSelection, PickedFile
from docchat.session.upload import UploadController
from docchat.ui.wiring import SEND_ON_ENTER, bind_to_client

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }

    .sidebar { background: rgba(255, 255, 255, 0.8); border-right: 1px solid #e2e8f0; }
    .brand {
        background: linear-gradient(90deg, #2563eb, #9333ea);
        -webkit-background-clip: text;
        color: transparent;
    }

    .message-user {
        background: #2563eb;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }
    .message-assistant {
        background: white;
        color: #1f2937;
        border: 1px solid #e2e8f0;
        border-radius: 18px 18px 18px 4px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #2563eb;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }
</style>
"""

STATUS_ICONS = {
    AttemptStatus.UPLOADING: ("cloud_upload", "text-blue-500"),
    AttemptStatus.SUCCEEDED: ("check_circle", "text-green-600"),
    AttemptStatus.FAILED: ("error", "text-red-600"),
}


@ui.page("/")
def session_page() -> None:
    """Sidebar with document uploads, main area with the chat."""
    ui.add_head_html(CUSTOM_CSS)

    config = get_client_config()
    client = NetworkClient(config)
    uploads = UploadController(client, config)
    chat = ChatController(client)

    input_field: ui.textarea
    send_btn: ui.button
    scroll: ui.scroll_area

    def render_attempt(attempt: Attempt) -> None:
        icon, color = STATUS_ICONS[attempt.status]
        with ui.card().classes("w-full p-3 gap-2"):
            with ui.row().classes("w-full items-center gap-2 no-wrap"):
                ui.icon(icon).classes(f"text-xl {color}")
                with ui.column().classes("flex-grow gap-0 min-w-0"):
                    ui.label(attempt.filename).classes("text-sm font-medium truncate")
                    ui.label(f"{attempt.size_bytes / 1024:.0f} KB").classes("text-xs text-gray-500")
                ui.button(
                    icon="close", on_click=lambda a=attempt.id: uploads.remove_from_view(a)
                ).props("flat round dense size=sm")
            if attempt.status is AttemptStatus.UPLOADING:
                ui.linear_progress(
                    value=uploads.progress(attempt.id) / 100, show_value=False
                ).props("rounded")
            elif attempt.error:
                ui.label(attempt.error).classes("text-xs text-red-600")

    @ui.refreshable
    def attempt_list() -> None:
        for attempt in reversed(uploads.visible_attempts):
            render_attempt(attempt)

    def render_turn(turn: Turn) -> None:
        is_user = turn.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align} gap-3 items-start no-wrap"):
            if not is_user:
                ui.icon("smart_toy").classes("text-2xl text-blue-600")
            with ui.column().classes(f"max-w-[70%] px-4 py-3 gap-3 {bubble}"):
                if turn.text:
                    if is_user:
                        ui.label(turn.text).classes("whitespace-pre-wrap text-sm")
                    else:
                        ui.markdown(turn.text, extras=["fenced-code-blocks", "tables"]).classes(
                            "text-sm"
                        )
                if turn.source_documents:
                    ui.separator()
                    with ui.row().classes("items-center gap-2"):
                        ui.icon("description").classes("text-gray-500")
                        ui.label("Source Documents").classes("text-sm font-medium text-gray-500")
                    for excerpt in turn.source_documents:
                        with ui.card().classes("w-full p-3 gap-2 bg-slate-50"):
                            with ui.row().classes("w-full items-center justify-between"):
                                ui.badge(excerpt.page_label, color="grey-3", text_color="black")
                                if excerpt.display_source:
                                    ui.label(excerpt.display_source).classes(
                                        "text-xs text-gray-500 truncate max-w-[200px]"
                                    )
                            if excerpt.text:
                                ui.label(excerpt.text).classes("text-xs text-gray-600 line-clamp-3")
            if is_user:
                ui.icon("person").classes("text-2xl text-slate-600")

    @ui.refreshable
    def transcript() -> None:
        if not chat.transcript:
            with ui.column().classes("w-full py-12 items-center gap-3"):
                ui.icon("smart_toy").classes("text-5xl text-gray-300")
                ui.label("Welcome to PDF Chat!").classes("text-lg text-gray-500")
                ui.label(
                    "Upload a PDF document and start asking questions about its content."
                ).classes("text-gray-400")
            return
        for turn in chat.transcript:
            render_turn(turn)
        if chat.is_awaiting_answer:
            with ui.row().classes("w-full justify-start gap-3 items-center"):
                ui.icon("smart_toy").classes("text-2xl text-blue-600")
                with ui.row().classes("message-assistant px-4 py-3 items-center gap-2"):
                    with ui.row().classes("gap-1"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")
                    ui.label("Thinking...").classes("text-sm text-gray-500 italic")

    def on_chat_change() -> None:
        transcript.refresh()
        busy = chat.is_awaiting_answer
        input_field.set_enabled(not busy)
        send_btn.set_enabled(not busy)
        scroll.scroll_to(percent=1.0)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        picked = PickedFile(
            name=e.file.name,
            content=await e.file.read(),
            content_type=e.file.content_type,
        )
        try:
            uploads.start_from_selection(FileSelection.of(picked))
        except SessionError as err:
            logger.info(f"Upload rejected: {err}")
            ui.notify(str(err), type="negative")
        finally:
            upload_area.reset()

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or chat.is_awaiting_answer:
            return
        input_field.value = ""
        await chat.ask(text)

    # === UI Layout ===
    with ui.row().classes("w-full min-h-screen no-wrap gap-0"):
        # Sidebar - uploads
        with ui.column().classes("sidebar w-[400px] min-h-screen p-6 gap-4"):
            ui.label("PDF Chat AI").classes("brand text-2xl font-bold")
            ui.label("Upload PDFs and chat with your documents using AI").classes(
                "text-sm text-gray-500"
            )
            ui.separator()
            upload_area = (
                ui.upload(label="Upload PDF File", on_upload=handle_upload, auto_upload=True)
                .props(f"accept={','.join(config.allowed_extensions)} flat bordered")
                .classes("w-full")
            )
            with ui.column().classes("w-full gap-2"):
                attempt_list()

        # Main - chat
        with ui.column().classes("flex-grow h-screen gap-0"):
            with ui.column().classes("w-full px-4 py-3 border-b bg-white gap-0"):
                ui.label("PDF Chat Assistant").classes("text-xl font-semibold")
                ui.label("Ask questions about your uploaded PDF documents").classes(
                    "text-sm text-gray-500"
                )
            with ui.scroll_area().classes("flex-grow w-full") as scroll:
                with ui.column().classes("w-full max-w-4xl mx-auto p-4 gap-6"):
                    transcript()
            with ui.row().classes("w-full max-w-4xl mx-auto p-4 gap-2 items-end no-wrap"):
                input_field = (
                    ui.textarea(placeholder="Ask a question about your PDF...")
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .on(SEND_ON_ENTER, send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props("unelevated")

    bind_to_client(
        ui.context.client,
        [(chat, on_chat_change), (uploads, attempt_list.refresh)],
    )
