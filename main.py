from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from core.config import settings
from core.exceptions import setup_exception_handlers
from core.logging_config import get_logger, setup_logging
from core.uploads import UPLOAD_URL_PREFIX, upload_root
from database import Base, engine
from model import (  # noqa: F401  (register tables on Base.metadata)
    appointment_model,
    blog_model,
    cms_model,
    department_model,
    doctor_model,
    page_model,
    patient_model,
    review_model,
    user_model,
)
from routers import (
    appointment_router,
    auth_router,
    blog_router,
    category_router,
    cms_router,
    department_router,
    doctor_router,
    home_router,
    page_router,
    patient_router,
    review_router,
    schedule_router,
    user_router,
    voice_router,
)

setup_logging()
logger = get_logger(__name__)

Base.metadata.create_all(bind=engine)
app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)
app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=str(upload_root())), name="uploads")
setup_exception_handlers(app)


@app.get("/")
def read_root():
    return {"message": "Hospital API is running"}


# doctors
app.include_router(doctor_router.router)
app.include_router(schedule_router.router)
app.include_router(department_router.router)

# patients & appointments
app.include_router(patient_router.router)
app.include_router(appointment_router.router)
app.include_router(appointment_router.patient_router)
app.include_router(review_router.router)

# auth
app.include_router(auth_router.router)
app.include_router(auth_router.register_router)
app.include_router(auth_router.verify_router)
app.include_router(auth_router.password_router)
app.include_router(user_router.router)

# content
app.include_router(home_router.router)
app.include_router(blog_router.router)
app.include_router(category_router.router)
app.include_router(page_router.router)
app.include_router(cms_router.header_router)
app.include_router(cms_router.footer_router)
app.include_router(cms_router.about_router)

# voice
app.include_router(voice_router.router)

logger.info("%s started, uploads served from %s", settings.PROJECT_NAME, settings.UPLOAD_DIR)


# uvicorn main:app --reload
