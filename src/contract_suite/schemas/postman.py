# schemas/postman.py

"""Pydantic models for Postman collections (format v2.1).

Only the parts the engine reads or writes are typed; every model keeps unknown
keys so that a loaded collection is written back without losing data.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from contract_suite.config.constants import DEFAULT_COLLECTION_SCHEMA


class PmModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PmKeyValue(PmModel):
    """Query parameter, path variable, header or collection variable."""

    key: str
    value: Optional[Any] = None
    disabled: Optional[bool] = None
    description: Optional[Any] = None


class PmUrl(PmModel):
    raw: Optional[str] = None
    protocol: Optional[str] = None
    host: Optional[List[str]] = None
    port: Optional[Any] = None
    path: List[str] = Field(default_factory=list)
    query: List[PmKeyValue] = Field(default_factory=list)
    hash: Optional[str] = None
    variable: List[PmKeyValue] = Field(default_factory=list)

    @field_validator("path", mode="before")
    @classmethod
    def _split_path(cls, value):
        if isinstance(value, str):
            return [segment for segment in value.split("/") if segment]
        return value

    @classmethod
    def parse(cls, raw: str) -> Dict[str, Any]:
        """Structured fields of a URL string, e.g. 'https://host:8443/pets?limit=10'"""
        rest, _, fragment = raw.partition("#")
        rest, _, query_string = rest.partition("?")
        protocol = None
        if "://" in rest:
            protocol, rest = rest.split("://", 1)

        segments = [segment for segment in rest.split("/") if segment]
        host = segments[0] if segments else ""
        port = None
        name, sep, candidate = host.rpartition(":")
        if sep and candidate.isdigit():
            host, port = name, candidate

        query = []
        for pair in query_string.split("&") if query_string else []:
            key, sep, value = pair.partition("=")
            query.append({"key": key, "value": value if sep else None})

        return {
            "raw": raw,
            "protocol": protocol,
            "host": host.split(".") if host else [],
            "port": port,
            "path": segments[1:],
            "query": query,
            "hash": fragment or None,
        }

    @property
    def path_string(self) -> str:
        return "/" + "/".join(self.path)

    def rebuild_raw(self) -> None:
        """Recompute ``raw`` from the structured fields and enabled query params"""
        raw = ".".join(self.host or [])
        if self.port:
            raw = f"{raw}:{self.port}"
        if self.path:
            raw = f"{raw}{self.path_string}"
        if self.protocol:
            raw = f"{self.protocol}://{raw}"
        params = [
            param.key if param.value is None else f"{param.key}={param.value}"
            for param in self.query
            if not param.disabled
        ]
        if params:
            raw = f"{raw}?{'&'.join(params)}"
        if self.hash:
            raw = f"{raw}#{self.hash}"
        self.raw = raw


class PmBody(PmModel):
    mode: Optional[str] = None
    raw: Optional[str] = None
    options: Optional[Dict[str, Any]] = None


class PmRequest(PmModel):
    method: str = "GET"
    header: List[PmKeyValue] = Field(default_factory=list)
    url: PmUrl = Field(default_factory=PmUrl)
    body: Optional[PmBody] = None
    description: Optional[Any] = None

    @field_validator("url", mode="before")
    @classmethod
    def _parse_url_string(cls, value):
        if isinstance(value, str):
            return PmUrl.parse(value)
        return value


class PmScript(PmModel):
    type: str = "text/javascript"
    exec: List[str] = Field(default_factory=list)

    @field_validator("exec", mode="before")
    @classmethod
    def _split_lines(cls, value):
        if isinstance(value, str):
            return value.split("\n")
        return value


class PmEvent(PmModel):
    listen: str
    script: PmScript = Field(default_factory=PmScript)


class PmItem(PmModel):
    """A single request of the collection."""

    id: Optional[str] = None
    name: str = ""
    request: PmRequest
    response: List[Any] = Field(default_factory=list)
    event: List[PmEvent] = Field(default_factory=list)

    def get_event(self, listen: str, create: bool = False) -> Optional[PmEvent]:
        for event in self.event:
            if event.listen == listen:
                return event
        if not create:
            return None
        event = PmEvent(listen=listen)
        self.event.append(event)
        return event


class PmItemGroup(PmModel):
    """A folder holding requests and nested folders."""

    id: Optional[str] = None
    name: str = ""
    item: List[Union[PmItem, "PmItemGroup"]]
    event: List[PmEvent] = Field(default_factory=list)
    description: Optional[Any] = None

    def add(self, entry: Union[PmItem, "PmItemGroup"]) -> None:
        self.item.append(entry)

    def find_group(self, name: str) -> Optional["PmItemGroup"]:
        for entry in self.item:
            if isinstance(entry, PmItemGroup) and entry.name == name:
                return entry
        return None


class PmInfo(PmModel):
    name: str = "Collection"
    postman_id: Optional[str] = Field(default=None, alias="_postman_id")
    schema_: str = Field(default=DEFAULT_COLLECTION_SCHEMA, alias="schema")
    description: Optional[Any] = None


class PmCollection(PmModel):
    info: PmInfo = Field(default_factory=PmInfo)
    item: List[Union[PmItem, PmItemGroup]] = Field(default_factory=list)
    variable: List[PmKeyValue] = Field(default_factory=list)
    event: List[PmEvent] = Field(default_factory=list)

    def add(self, entry: Union[PmItem, PmItemGroup]) -> None:
        self.item.append(entry)

    def iter_items(self) -> Iterator[Tuple[PmItem, Optional[PmItemGroup]]]:
        """Yield every request depth-first with its enclosing folder"""

        def walk(entries, parent):
            for entry in entries:
                if isinstance(entry, PmItemGroup):
                    yield from walk(entry.item, entry)
                else:
                    yield entry, parent

        yield from walk(self.item, None)


PmItemGroup.model_rebuild()
PmCollection.model_rebuild()
