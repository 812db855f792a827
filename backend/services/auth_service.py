import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from config import settings
from fastapi import HTTPException, status
from jose import JWTError, jwt
from models.user import User
from passlib.context import CryptContext
from schemas.auth import TokenData
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthService:
    def __init__(self):
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.access_token_expire_hours = settings.access_token_expire_hours

    def verify_password(self, plain_password: str, password_hash: str) -> bool:
        return pwd_context.verify(plain_password, password_hash)

    def get_password_hash(self, password: str) -> str:
        return pwd_context.hash(password)

    def create_access_token(
        self, user: User, expires_delta: Optional[timedelta] = None
    ) -> str:
        if expires_delta is None:
            expires_delta = timedelta(hours=self.access_token_expire_hours)
        expire = datetime.now(timezone.utc) + expires_delta

        to_encode = {
            "sub": user.username,
            "id": user.id,
            "role": user.role,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> TokenData:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            username: str = payload.get("sub")
            user_id = payload.get("id")
            if username is None or user_id is None:
                raise JWTError("Token is missing identity claims")
            return TokenData(id=user_id, username=username, role=payload.get("role"))
        except JWTError as e:
            logger.warning(f"JWT verify error: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired token",
            )

    def authenticate_user(
        self, db: Session, username: str, password: str
    ) -> Optional[User]:
        user = db.query(User).filter(User.username == username).first()
        if not user or not user.is_active:
            return None
        if not self.verify_password(password, user.password_hash):
            return None
        return user

    def upsert_user(
        self, db: Session, username: str, password: str, role: str
    ) -> User:
        """Create the account or reset its password, role and active flag"""
        user = db.query(User).filter(User.username == username).first()
        if not user:
            user = User(username=username)
            db.add(user)

        user.password_hash = self.get_password_hash(password)
        user.role = role
        user.is_active = True

        db.commit()
        db.refresh(user)
        return user


auth_service = AuthService()
