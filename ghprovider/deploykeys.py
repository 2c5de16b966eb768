"""Deploy keys of a repository."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import GitProviderError, MultiError, NotFoundError, UnexpectedEventError
from .models import DeployKeyInfo, validate_and_default
from .util import ClientContext


def _is_not_found(err: BaseException) -> bool:
    if isinstance(err, NotFoundError):
        return True
    return isinstance(err, MultiError) and err.contains(NotFoundError)


def _key_text(key: bytes | str) -> str:
    return key.decode("utf-8") if isinstance(key, (bytes, bytearray)) else str(key)


def deploy_key_from_api(api_obj: dict[str, Any]) -> DeployKeyInfo:
    """Build a DeployKeyInfo from a deploy key object of the API."""
    return DeployKeyInfo(
        name=api_obj["title"],
        key=str(api_obj["key"]).encode("utf-8"),
        read_only=api_obj.get("read_only"),
    )


def _apply_info(info: DeployKeyInfo, api_obj: dict[str, Any]) -> None:
    api_obj["title"] = info.name
    api_obj["key"] = _key_text(info.key)
    if info.read_only is not None:
        api_obj["read_only"] = info.read_only


def deploy_key_to_api(info: DeployKeyInfo) -> dict[str, Any]:
    """Build the API request object for creating the deploy key info."""
    api_obj: dict[str, Any] = {}
    _apply_info(info, api_obj)
    return api_obj


def deploy_key_spec(key: dict[str, Any]) -> dict[str, Any]:
    """Return only the desired-state fields of a deploy key object."""
    return {
        "title": key.get("title"),
        "key": key.get("key"),
        "read_only": key.get("read_only"),
    }


@dataclass
class DeployKey:
    """A deploy key of a repository, backed by the API object."""

    client: DeployKeyClient = field(repr=False, compare=False)
    api_object: dict[str, Any]

    def get(self) -> DeployKeyInfo:
        return deploy_key_from_api(self.api_object)

    def set(self, info: DeployKeyInfo) -> None:
        """Validate info and copy it into the API object."""
        info.validate()
        _apply_info(info, self.api_object)

    def repository(self) -> Any:
        return self.client.ref

    def update(self) -> None:
        """Apply the local state to the server by deleting and recreating the key."""
        self.delete()
        self._create_into_self()

    def delete(self) -> None:
        """Delete the deploy key from the repository."""
        key_id = self.api_object.get("id")
        if key_id is None:
            raise UnexpectedEventError("didn't expect ID to be nil")
        ref = self.client.ref
        self.client.context.api.delete_key(ref.identity(), ref.repository(), key_id)

    def reconcile(self) -> bool:
        """Make the local state the actual state; return whether anything changed."""
        try:
            actual = self.client.get(self.api_object["key"])
        except GitProviderError as err:
            if not _is_not_found(err):
                raise
            self._create_into_self()
            return True
        if deploy_key_spec(self.api_object) == deploy_key_spec(actual.api_object):
            return False
        self.update()
        return True

    def _create_into_self(self) -> None:
        ref = self.client.ref
        self.api_object = self.client.context.api.create_key(
            ref.identity(), ref.repository(), self.api_object
        )


@dataclass
class DeployKeyClient:
    """Operates on the deploy keys of one repository."""

    context: ClientContext
    ref: Any

    def get(self, name: str) -> DeployKey:
        """Return the deploy key titled name, or raise NotFoundError."""
        for key in self.list():
            if key.api_object.get("title") == name:
                return key
        raise NotFoundError(f"deploy key {name!r} not found")

    def list(self) -> list[DeployKey]:
        api_objs = self.context.api.list_keys(self.ref.identity(), self.ref.repository())
        return [DeployKey(self, api_obj) for api_obj in api_objs]

    def create(self, req: DeployKeyInfo) -> DeployKey:
        """Create a deploy key from req after defaulting and validating it."""
        req = validate_and_default(req)
        api_obj = self.context.api.create_key(
            self.ref.identity(), self.ref.repository(), deploy_key_to_api(req)
        )
        return DeployKey(self, api_obj)

    def reconcile(self, req: DeployKeyInfo) -> tuple[DeployKey, bool]:
        """Make req the actual state; return the key and whether an action was taken."""
        req = validate_and_default(req)
        try:
            actual = self.get(req.name)
        except GitProviderError as err:
            if not _is_not_found(err):
                raise
            return self.create(req), True
        if req == actual.get():
            return actual, False
        actual.set(req)
        actual.update()
        return actual, True