import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from app.api.v1.health import router as health_router
from app.api.v1.chat import router as chat_router
from app.api.v1.profile_ai import router as profile_ai_router
from app.api.v1.referrals import router as referrals_router
from app.api.v1.sessions import router as sessions_router
from app.api.v1.gamification import router as gamification_router
from app.api.v1.users import router as users_router
from app.core.cors import cors_options
from app.core.rate_limit import limiter
from app.core.config import settings
from app.core.lifespan import lifespan

logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Alumni Career Engine API", version="0.1.0", lifespan=lifespan)

app.add_middleware(CORSMiddleware, **cors_options())
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(users_router, prefix="/v1", tags=["Users"])
app.include_router(profile_ai_router, prefix="/v1", tags=["AI Profile"])
app.include_router(referrals_router, prefix="/v1", tags=["Referrals"])
app.include_router(sessions_router, prefix="/v1", tags=["Sessions"])
app.include_router(gamification_router, prefix="/v1", tags=["Gamification"])
app.include_router(chat_router, prefix="/v1", tags=["Chat"])
