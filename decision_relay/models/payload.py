from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Ordered name/value pairs sent with the decision call
HeaderSet = List[Tuple[str, str]]


class OutboundPayload(BaseModel):
    """Body of the decision call: both identifiers plus the encoded context."""
    model_config = ConfigDict(frozen=True)

    uid: Optional[str] = Field(None, description="Visitor identifier")
    cid: Optional[str] = Field(None, description="Campaign identifier")
    payload: str = Field(..., description="Base64 encoded request environment")

    def to_wire(self) -> Dict[str, Any]:
        """Wire form, nulls included."""
        return {"uid": self.uid, "cid": self.cid, "payload": self.payload}
