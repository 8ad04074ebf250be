"""Chain identity model."""

from pydantic import BaseModel, ConfigDict


class Chain(BaseModel):
    """An EVM chain, identified by its numeric id."""
    model_config = ConfigDict(frozen=True)
    
    id: int
    name: str
    
    @property
    def slug(self) -> str:
        """Lower-case chain name as used by the price oracle."""
        return self.name.lower()


BASE = Chain(id=8453, name="Base")
