from __future__ import annotations

from io import StringIO
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError
from ruamel.yaml.representer import RoundTripRepresenter
from ruamel.yaml.scalarstring import ScalarString

from kubetoken.errors import DecodeError, EncodeError
from kubetoken.logger import logger

# Cluster options may be spelled the way kubectl writes them or with
# underscores. Whichever spelling a document uses is kept on write.
_ALTERNATE_KEYS = {
    "tls-server-name": "tls_server_name",
    "insecure-skip-tls-verify": "insecure_skip_verify",
    "certificate-authority": "certificate_authority",
    "certificate-authority-data": "certificate_authority_data",
    "proxy-url": "proxy_url",
    "disable-compression": "disable_compression",
}
_ALTERNATE_KEYS.update({v: k for k, v in list(_ALTERNATE_KEYS.items())})


class KubeBaseModel(BaseModel):
    # Keys this tool does not know about are kept so they can be written back.
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Cluster(KubeBaseModel):
    """
    Contains information about how to communicate with a Kubernetes cluster.
    This tool never interprets these fields, it only carries them through.
    """

    server: str = Field(
        ..., description="The address of the cluster (https://hostname:port)."
    )
    tls_server_name: Optional[str] = Field(
        None,
        alias="tls-server-name",
        description="The server name used to check the server certificate.",
    )
    insecure_skip_verify: Optional[bool] = Field(
        None,
        alias="insecure-skip-tls-verify",
        description="Whether to skip the validity check of the server certificate.",
    )
    certificate_authority: Optional[str] = Field(
        None,
        alias="certificate-authority",
        description="The path to a cert file for the certificate authority.",
    )
    certificate_authority_data: Optional[str] = Field(
        None,
        alias="certificate-authority-data",
        description="PEM-encoded certificate authority certificates.",
    )
    proxy_url: Optional[str] = Field(
        None,
        alias="proxy-url",
        description="The URL of the proxy used for all requests to the cluster.",
    )
    disable_compression: Optional[bool] = Field(
        None,
        alias="disable-compression",
        description="Whether to opt out of response compression.",
    )


class NamedCluster(KubeBaseModel):
    name: str = Field(..., description="The nickname of the cluster.")
    cluster: Cluster = Field(..., description="The cluster information.")


class User(KubeBaseModel):
    """
    Contains information on the authenticated user.
    """

    token: Optional[str] = Field(None, description="The bearer token of the user.")


class NamedUser(KubeBaseModel):
    name: str = Field(..., description="The nickname of the user.")
    user: User = Field(..., description="The user information.")


class Context(KubeBaseModel):
    """
    A tuple of references to a cluster, a user and an optional namespace.
    """

    cluster: str = Field(..., description="The name of the cluster.")
    user: str = Field(..., description="The name of the user.")
    namespace: Optional[str] = Field(
        None, description="The default namespace for unspecified requests."
    )


class NamedContext(KubeBaseModel):
    name: str = Field(..., description="The nickname of the context.")
    context: Context = Field(..., description="The context information.")


class KubeConfig(KubeBaseModel):
    """
    Holds the information needed to connect to remote Kubernetes clusters as a
    given user.
    """

    apiVersion: str = Field(..., description="The api version of the document.")
    kind: str = Field(..., description="The kind of the document.")
    clusters: List[NamedCluster] = Field(
        [], description="The clusters, referable by name."
    )
    contexts: List[NamedContext] = Field(
        [], description="The contexts, referable by name."
    )
    current_context: str = Field(
        ...,
        alias="current-context",
        description="The name of the context used by default.",
    )
    users: List[NamedUser] = Field([], description="The users, referable by name.")

    @field_validator("clusters", "contexts", "users", mode="before")
    def null_as_empty(cls, v: Any) -> Any:
        # kubectl writes `contexts: null` when there are none
        return [] if v is None else v

    @model_validator(mode="after")
    def warn_duplicate_names(self) -> KubeConfig:
        """
        Logs a warning for every name that is used more than once in the
        clusters, contexts or users. Lookups use the first entry with a name.
        """
        sections: Dict[str, List[Any]] = {
            "cluster": self.clusters,
            "context": self.contexts,
            "user": self.users,
        }
        for kind, entries in sections.items():
            seen = set()
            for entry in entries:
                if entry.name in seen:
                    logger.warning(
                        f'Duplicate {kind} name "{entry.name}" in kubeconfig. '
                        "Only the first one is used."
                    )
                seen.add(entry.name)
        return self


class _KubeRepresenter(RoundTripRepresenter):
    pass


def _represent_none(representer: RoundTripRepresenter, data: None) -> Any:
    # kubectl writes `null`, ruamel would leave the value empty
    return representer.represent_scalar("tag:yaml.org,2002:null", "null")


_KubeRepresenter.add_representer(type(None), _represent_none)


def _yaml() -> YAML:
    yaml = YAML()
    yaml.Representer = _KubeRepresenter
    yaml.preserve_quotes = True
    # Same layout as kubectl
    yaml.indent(mapping=2, sequence=2, offset=0)
    yaml.width = 4096
    return yaml


def _summarize(e: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in e.errors()
    )


def load_document(yaml_str: str) -> CommentedMap:
    """
    Parse a YAML string into a round-trip document.

    The returned mapping remembers key order, comments and quoting so that it
    can be written back with only the changed values touched.

    Args:
        yaml_str (str): The YAML string to parse.

    Returns:
        CommentedMap: The parsed document.

    Raises:
        DecodeError: If the string is not valid YAML or is not a mapping.
    """
    try:
        data = _yaml().load(yaml_str)
    except YAMLError as e:
        raise DecodeError(f"Invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError("Invalid kubeconfig: the document is not a mapping.")
    return data


def parse_document(data: Dict[str, Any]) -> KubeConfig:
    try:
        return KubeConfig.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Invalid kubeconfig: {_summarize(e)}") from e


def parse_yaml(yaml_str: str) -> KubeConfig:
    """
    Parse a YAML string and return a KubeConfig object.

    Args:
        yaml_str (str): The YAML string to parse.

    Returns:
        KubeConfig: The parsed KubeConfig object.

    Raises:
        DecodeError: If the string is not a valid kubeconfig document.
    """
    return parse_document(load_document(yaml_str))


# Marks a value with no counterpart in the baseline
_UNKNOWN = object()


def dump_config(config: KubeConfig) -> Dict[str, Any]:
    return config.model_dump(by_alias=True, exclude_unset=True)


def _document_key(target: Dict[str, Any], key: str) -> str:
    alternate = _ALTERNATE_KEYS.get(key)
    if key not in target and alternate is not None and alternate in target:
        return alternate
    return key


def _overlay(target: Any, source: Any, baseline: Any = _UNKNOWN) -> Any:
    """
    Write source onto target in place and return the node that should replace
    target in its parent.

    baseline is what source looked like when target was last in sync with the
    model. Wherever source still equals it, target is kept as it is, so values
    this tool never changed keep their original spelling (`yes`, `"true"`,
    `null`, ...).
    """
    if baseline is not _UNKNOWN and source == baseline:
        return target

    if isinstance(target, dict) and isinstance(source, dict):
        for key, value in source.items():
            previous = (
                baseline.get(key, _UNKNOWN) if isinstance(baseline, dict) else _UNKNOWN
            )
            key = _document_key(target, key)
            if key in target:
                target[key] = _overlay(target[key], value, previous)
            else:
                target[key] = value
        # Keys missing from source are left alone, the model never removes any.
        return target

    if (
        isinstance(target, list)
        and isinstance(source, list)
        and len(target) == len(source)
    ):
        in_step = isinstance(baseline, list) and len(baseline) == len(source)
        for i, value in enumerate(source):
            target[i] = _overlay(
                target[i], value, baseline[i] if in_step else _UNKNOWN
            )
        return target

    if target == source and isinstance(target, type(source)):
        return target
    if isinstance(target, ScalarString) and isinstance(source, str):
        # Keep the quoting style of the replaced value
        return type(target)(source)
    return source


def generate_yaml(
    config: KubeConfig,
    document: Optional[CommentedMap] = None,
    baseline: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Generate a YAML string representation of the given config object.

    When the document the config was parsed from is given, the config is written
    onto it first so that key order, comments and quoting survive. Only values
    that differ from baseline, the dump of the config as it was when the
    document was last written or read, replace document nodes. Without a
    baseline, the document is parsed again to get one. Optional fields that
    were never set are left out.

    Args:
        config (KubeConfig): The config object to generate YAML from.
        document (CommentedMap, optional): The document the config was parsed from.
        baseline (Dict[str, Any], optional): The dump_config output matching document.

    Returns:
        str: The YAML string representation of the config object.

    Raises:
        EncodeError: If the config cannot be represented as YAML.
    """
    try:
        data = dump_config(config)
        if document is not None:
            if baseline is None:
                baseline = dump_config(parse_document(document))
            data = _overlay(document, data, baseline)

        buf = StringIO()
        _yaml().dump(data, buf)
    except (DecodeError, YAMLError, ValueError, TypeError) as e:
        raise EncodeError(f"Failed to write kubeconfig: {e}") from e
    return buf.getvalue()
