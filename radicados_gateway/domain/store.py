"""Record store contract shared by the SQL and hosted-table backends"""

from typing import Any, Dict, List, Optional, Protocol

from radicados_gateway.domain.models import Document


class DocumentStore(Protocol):
    """
    Persistence for radicados.

    Every method raises RecordStoreError when the backend rejects the call
    or cannot be reached.
    """

    async def list_documents(self) -> List[Document]:
        """All documents, newest first"""
        ...

    async def list_pending(self) -> List[Document]:
        """Documents without a final response date"""
        ...

    async def get(self, document_id: str) -> Optional[Document]:
        ...

    async def create(self, fields: Dict[str, Any]) -> Document:
        ...

    async def update(self, document_id: str, changes: Dict[str, Any]) -> Optional[Document]:
        ...

    async def set_alert_flags(self, ids: List[str], value: bool) -> None:
        """Set alerta on every id in a single write"""
        ...
