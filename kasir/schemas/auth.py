from kasir.schemas.common import Record

class User(Record):
    id: str
    email: str
    password: str
    name: str
    role: str = "admin"

class UserOut(Record):
    id: str
    email: str
    name: str
    role: str
