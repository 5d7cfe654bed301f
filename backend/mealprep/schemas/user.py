from pydantic import BaseModel, Field

EMAIL_REGX = r"^[^@]+@[^@]+\.[^@]+$"


# Schema for creating user
class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., pattern=EMAIL_REGX)
    password: str = Field(..., min_length=6)

# Schema for login (JSON body)
class UserLogin(BaseModel):
    email: str = Field(..., pattern=EMAIL_REGX)
    password: str

# Schema for returning user (without password)
class UserResponse(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True

# Schema for signup response
class UserSignupResponse(BaseModel):
    user: UserResponse
    access_token: str
    token_type: str
