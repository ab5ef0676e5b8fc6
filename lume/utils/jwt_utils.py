import time
import typing

import jwt

JWT_AUDIENCE = 'lume:auth'


def generate_JWT_token(
    user_id: str,
    jwt_secret: str,
    jwt_algorithm: str,
    lifetime: int = 86400,
) -> str:
    payload = {
        'sub': user_id,
        'exp': int(time.time()) + lifetime,
        'aud': [JWT_AUDIENCE],
    }
    return jwt.encode(payload, jwt_secret, algorithm=jwt_algorithm)


def decode_JWT_token(
    token: str,
    jwt_secret: str,
    jwt_algorithm: str,
) -> dict:
    # Expiration is verified by PyJWT and raises ExpiredSignatureError
    return jwt.decode(
        token,
        jwt_secret,
        algorithms=[jwt_algorithm],
        audience=JWT_AUDIENCE,
    )
