import json
import logging

from .models import CityModel

logger = logging.getLogger(__name__)


def export_to_json(model: CityModel, filename: str = "city_model.json") -> str:
    with open(filename, "w") as f:
        json.dump(model.to_dict(), f, indent=2)
    logger.info(f"City model exported to {filename}")
    return filename


def load_json(filename: str) -> dict:
    with open(filename, "r") as f:
        return json.load(f)
