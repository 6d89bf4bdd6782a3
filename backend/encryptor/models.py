# encryptor/models.py
from pydantic import BaseModel, Field

class EncryptIn(BaseModel):
    plaintext: str = Field(..., description="Sensitive value to seal (non-empty)")

class EncryptOut(BaseModel):
    envelope: str = Field(..., description="ivHex:tagHex:cipherHex")

class DecryptIn(BaseModel):
    envelope: str

class DecryptOut(BaseModel):
    plaintext: str

class HealthOut(BaseModel):
    status: str
    encryptor: str
    backend: str
