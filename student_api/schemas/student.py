from pydantic import BaseModel, ConfigDict, field_validator


class StudentBase(BaseModel):
    name: str
    email: str
    linkedin_profile: str = ""
    phone: str = ""

    @field_validator("linkedin_profile", "phone", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        """Optional text is always a string: null (or SQL NULL) becomes ""."""
        return "" if v is None else v


class StudentCreate(StudentBase):
    pass


class StudentUpdate(StudentBase):
    pass


class StudentInDB(StudentBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class Student(StudentInDB):
    pass
