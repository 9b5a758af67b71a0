from typing import Any, Protocol

from pydantic import BaseModel


class BlockMapper(Protocol):
    """
    Defines the contract for translating one configuration block between the
    user-facing schema and the provider's wire model.
    """

    block_name: str

    def expand(self, state: Any) -> BaseModel:
        """
        Build the wire-level object from the user-facing block.

        Args:
            state: The block as stored by the schema layer (a list holding
                at most one mapping), a decoded model, or None

        Returns:
            The wire model to send to the remote service
        """
        ...

    def flatten(self, remote: BaseModel | None) -> list[BaseModel]:
        """
        Build the user-facing block from a wire-level object.

        Args:
            remote: The wire model returned by the remote service, or None

        Returns:
            A list holding the flattened block, or an empty list when the
            remote object is absent
        """
        ...

    def parse_remote(self, payload: dict[str, Any]) -> BaseModel:
        """
        Parse a JSON payload returned by the remote service into its wire model.
        """
        ...
