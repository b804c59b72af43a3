from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Any, List, Optional, Union


class SchemeReference(BaseModel):
    ref: str = Field(..., description="The unresolved '$ref' target of the security scheme.")


class SchemeDefinition(BaseModel):
    kind: Optional[str] = Field(None, description="The scheme 'type' (apiKey, http, oauth2, ...).")
    subtype: Optional[str] = Field(None, description="The http auth 'scheme' (bearer, basic, ...).")
    flows: Optional[Dict[Any, Any]] = Field(None, description="OAuth2 flows keyed by flow name.")


class SecuritySchemeEntry(BaseModel):
    name: str
    definition: Union[SchemeReference, SchemeDefinition]


class GenerationOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    with_analytics: bool = False
    with_tracing: bool = False


class VariableDeclaration(BaseModel):
    name: str
    placeholder: str
    comment_lines: List[str] = []


class CommentLine(BaseModel):
    text: str


EnvEntry = Union[VariableDeclaration, CommentLine]


class LoaderField(BaseModel):
    name: str
    env_var: str
    default: str


class LoaderDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    env_file: str = Field("../.env", description="Env file path relative to the loader module's directory.")
    variables: List[LoaderField]


class EnvExampleRequest(BaseModel):
    openapi_spec: Dict[str, Any] = Field(
        ...,
        description="A valid OpenAPI 3.x specification as a JSON object."
    )
    with_analytics: bool = Field(
        False,
        description="Add the MCPcat analytics variables to the template."
    )
    with_tracing: bool = Field(
        False,
        description="Add the OpenTelemetry collector variables to the template."
    )

    def options(self) -> GenerationOptions:
        return GenerationOptions(with_analytics=self.with_analytics, with_tracing=self.with_tracing)
