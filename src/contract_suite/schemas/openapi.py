# schemas/openapi.py

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from contract_suite.config.constants import PATH_REF_SEPARATOR


class OasMediaType(BaseModel):
    """A single content-type entry of a documented response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    schema_: Optional[Dict[str, Any]] = Field(
        default=None, alias="schema", description="Dereferenced JSON schema"
    )
    example: Optional[Any] = None


class OasResponse(BaseModel):
    """A documented response of an operation."""

    model_config = ConfigDict(frozen=True)

    description: Optional[str] = None
    content: Dict[str, OasMediaType] = Field(default_factory=dict)
    headers: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class OasMappedOperation(BaseModel):
    """A path + method entry of the API contract with its responses."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Path template, e.g. /pets/{petId}")
    method: str = Field(..., description="Upper-case HTTP method")
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    parameters: List[Dict[str, Any]] = Field(default_factory=list)
    request_body: Optional[Dict[str, Any]] = None
    responses: Dict[str, OasResponse] = Field(default_factory=dict)

    @property
    def path_ref(self) -> str:
        return f"{self.method}{PATH_REF_SEPARATOR}{self.path}"

    def filter_response(
        self, code: Optional[str] = None, content_type: Optional[str] = None
    ) -> "OasMappedOperation":
        """Return a copy documenting only ``code`` (and ``content_type``).

        Unknown codes yield a copy without responses.
        """
        if code is None:
            return self

        response = self.responses.get(str(code))
        if response is None:
            return self.model_copy(update={"responses": {}})

        if content_type:
            response = response.model_copy(
                update={
                    "content": {
                        media: entry
                        for media, entry in response.content.items()
                        if media == content_type
                    }
                }
            )
        return self.model_copy(update={"responses": {str(code): response}})
