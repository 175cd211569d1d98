from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class Record(BaseModel):
    """Base for stored records: camelCase on the wire and in storage, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
