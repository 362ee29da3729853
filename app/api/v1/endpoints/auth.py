# app/api/v1/endpoints/auth.py

from fastapi import APIRouter, HTTPException, status

from app.core import security
from app.schemas.auth_schemas import LoginRequestSchema, LoginResponseSchema

router = APIRouter()


@router.post("/auth/login", response_model=LoginResponseSchema)
async def login(request: LoginRequestSchema):
    """
    Checks the admin credentials. The client keeps the username and sends the
    same pair as HTTP Basic credentials on write requests.
    """
    if not security.verify_admin_credentials(request.username, request.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
        )
    return {"username": request.username}
