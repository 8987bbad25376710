from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

GENERIC_ERROR = "Sorry, I encountered an error processing your request. Please try again."
SEARCH_ERROR = "Sorry, I encountered an error while searching. Please try again."


class _Response(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: str
    requires_follow_up: bool = False


class MessageResponse(_Response):
    type: Literal["message"] = "message"


class FollowUpResponse(_Response):
    type: Literal["follow_up"] = "follow_up"
    requires_follow_up: bool = True
    follow_up_question: Optional[str] = None


class SearchResultsResponse(_Response):
    type: Literal["search_results"] = "search_results"
    data: Any = None


class ErrorResponse(_Response):
    type: Literal["error"] = "error"


AgentResponse = Annotated[
    Union[MessageResponse, FollowUpResponse, SearchResultsResponse, ErrorResponse],
    Field(discriminator="type"),
]

response_adapter = TypeAdapter(AgentResponse)


def as_response(raw: Any) -> AgentResponse:
    """Coerce a graph output (model or plain dict) into a response variant."""
    if isinstance(raw, _Response):
        return raw
    return response_adapter.validate_python(raw)
