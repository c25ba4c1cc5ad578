import logging
import os

from fastapi import FastAPI

from .module import provide_injector

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

injector = provide_injector()
app = injector.get(FastAPI)
