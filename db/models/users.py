from peewee import AutoField, CharField, DateTimeField

from db.base import BaseModel, utc_now


class User(BaseModel):
    id = AutoField(primary_key=True)
    email = CharField(max_length=255, unique=True)
    hashed_password = CharField(max_length=255)
    role = CharField(max_length=16, default="admin")
    created_at = DateTimeField(default=utc_now)

    class Meta:
        table_name = "users"

    @classmethod
    def get_by_email(cls, email: str):
        return cls.get_or_none(cls.email == email.strip().lower())

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
