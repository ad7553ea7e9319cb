import uvicorn

from beacon.config import settings
from beacon.main import create_app

app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
