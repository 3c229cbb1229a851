from fastapi import FastAPI

from walletpay.logging import configure_logging
from walletpay.routes import router

configure_logging()

app = FastAPI(title="Wallet Payment Completion Service")

app.include_router(router)
