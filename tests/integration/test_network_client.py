"""Integration tests for NetworkClient against the stub indexing service.

Real httpx requests go through ASGITransport into a FastAPI app, so the
query string, multipart encoding and status handling are exercised end to end.
"""

import httpx
import pytest
import pytest_check as check

from docchat.client.network import NetworkClient
from docchat.config import ClientConfig
from docchat.errors import DecodeError, RemoteError, TransportError
from tests.conftest import PDF_BYTES, StubBackend


class TestAsk:
    async def test_decodes_answer_and_docs(
        self, network_client: NetworkClient, stub_backend: StubBackend
    ) -> None:
        stub_backend.chat_body = {
            "message": "The report covers Q3.",
            "docs": [
                {
                    "pageContent": "Q3 revenue grew.",
                    "metadata": {"loc": {"pageNumber": 3}, "source": "/data/report.pdf"},
                }
            ],
        }

        payload = await network_client.ask("What does the report cover?")

        check.equal(payload.message, "The report covers Q3.")
        check.equal(payload.docs[0].page_content, "Q3 revenue grew.")
        check.equal(payload.docs[0].metadata.loc.page_number, 3)
        check.equal(stub_backend.questions, ["What does the report cover?"])

    async def test_question_is_sent_as_query_param(
        self, network_client: NetworkClient, stub_backend: StubBackend
    ) -> None:
        question = "a & b = c? 100% sure / maybe"

        await network_client.ask(question)

        assert stub_backend.questions == [question]

    async def test_non_success_status_raises_remote_error(
        self, network_client: NetworkClient, stub_backend: StubBackend
    ) -> None:
        stub_backend.chat_status = 500
        stub_backend.chat_body = {"detail": "boom"}

        with pytest.raises(RemoteError) as exc_info:
            await network_client.ask("q")

        assert exc_info.value.status_code == 500

    async def test_non_json_body_raises_decode_error(
        self, network_client: NetworkClient, stub_backend: StubBackend
    ) -> None:
        stub_backend.chat_body = "<html>gateway page</html>"

        with pytest.raises(DecodeError):
            await network_client.ask("q")

    async def test_missing_message_raises_decode_error(
        self, network_client: NetworkClient, stub_backend: StubBackend
    ) -> None:
        stub_backend.chat_body = {"docs": []}

        with pytest.raises(DecodeError):
            await network_client.ask("q")


class TestSubmitDocument:
    async def test_uploads_multipart_file(
        self, network_client: NetworkClient, stub_backend: StubBackend
    ) -> None:
        receipt = await network_client.submit_document(PDF_BYTES, "paper.pdf")

        check.equal(receipt.status_code, 200)
        check.equal(receipt.filename, "paper.pdf")
        check.equal(stub_backend.uploads, [("paper.pdf", PDF_BYTES)])

    async def test_any_success_status_is_accepted(
        self, network_client: NetworkClient, stub_backend: StubBackend
    ) -> None:
        stub_backend.upload_status = 202

        receipt = await network_client.submit_document(PDF_BYTES, "paper.pdf")

        assert receipt.status_code == 202

    async def test_non_success_status_raises_remote_error(
        self, network_client: NetworkClient, stub_backend: StubBackend
    ) -> None:
        stub_backend.upload_status = 413

        with pytest.raises(RemoteError) as exc_info:
            await network_client.submit_document(PDF_BYTES, "huge.pdf")

        assert exc_info.value.status_code == 413
        assert "413" in str(exc_info.value)

    async def test_wrong_field_name_is_rejected_by_service(
        self, client_config: ClientConfig, stub_backend: StubBackend
    ) -> None:
        config = client_config.model_copy(update={"upload_field_name": "pdf"})
        client = NetworkClient(config, transport=httpx.ASGITransport(app=stub_backend.build_app()))

        with pytest.raises(RemoteError) as exc_info:
            await client.submit_document(PDF_BYTES, "paper.pdf")

        assert exc_info.value.status_code == 422


class TestTransportFailures:
    @pytest.fixture
    def unreachable_client(self, client_config: ClientConfig) -> NetworkClient:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        return NetworkClient(client_config, transport=httpx.MockTransport(refuse))

    async def test_ask_raises_transport_error(self, unreachable_client: NetworkClient) -> None:
        with pytest.raises(TransportError, match="Connection failed"):
            await unreachable_client.ask("anyone there?")

    async def test_upload_raises_transport_error(self, unreachable_client: NetworkClient) -> None:
        with pytest.raises(TransportError):
            await unreachable_client.submit_document(PDF_BYTES, "a.pdf")

    async def test_timeout_is_transport_error(self, client_config: ClientConfig) -> None:
        def time_out(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = NetworkClient(client_config, transport=httpx.MockTransport(time_out))

        with pytest.raises(TransportError):
            await client.ask("slow?")
