from pydantic import BaseModel, ConfigDict, Field


class PageLocation(BaseModel):
    """Location of an excerpt inside its source document."""

    model_config = ConfigDict(populate_by_name=True)

    page_number: int | None = Field(None, alias="pageNumber")


class SourceMetadata(BaseModel):
    """Attribution metadata attached to a retrieved chunk.

    Attributes:
        loc: Page location, when the indexer tracked one.
        source: Path or name of the indexed file.
    """

    loc: PageLocation | None = None
    source: str | None = None


class SourceDocument(BaseModel):
    """A retrieved chunk as returned by the chat endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    page_content: str | None = Field(None, alias="pageContent")
    metadata: SourceMetadata | None = None


class ChatReplyPayload(BaseModel):
    """Response body of the chat endpoint.

    Attributes:
        message: The generated answer.
        docs: Chunks the answer was grounded on, in relevance order.
    """

    message: str
    docs: list[SourceDocument] | None = None
