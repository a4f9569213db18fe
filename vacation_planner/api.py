# vacation_planner/api.py
import os
import logging
from typing import Optional

from flask import Flask, request, jsonify

from . import config
from .cache import JsonFilePlaceCache, JsonFileSolutionCache, SolutionCache
from .data_models import DayPlanRequest, SlotRequest
from .errors import InvalidTag, PlaceSourceError
from .maps_client import MapsClient
from .optimization_engine import select_day_places
from .place_source import MapsPlaceSource, PlaceSource, StaticPlaceSource
from .slot_solution import generate_slot_solution


def default_place_source(logger: logging.Logger) -> PlaceSource:
    """A local place pool if one exists, Google Maps otherwise."""
    if os.path.exists(config.PLACES_DATA_PATH):
        logger.info("Serving places from %s", config.PLACES_DATA_PATH)
        return StaticPlaceSource.from_file(config.PLACES_DATA_PATH)
    if not config.GOOGLE_MAPS_API_KEY:
        logger.warning("%s not found and GOOGLE_MAPS_API_KEY is not set.", config.PLACES_DATA_PATH)
    return MapsPlaceSource(MapsClient(config.GOOGLE_MAPS_API_KEY, logger=logger),
                           place_cache=JsonFilePlaceCache(config.PLACE_CACHE_FILE, logger),
                           logger=logger)


def create_app(place_source: Optional[PlaceSource] = None,
               solution_cache: Optional[SolutionCache] = None,
               logger: Optional[logging.Logger] = None) -> Flask:
    app = Flask(__name__)
    log = logger or config.configure_logging()
    source = place_source or default_place_source(log)
    cache = solution_cache if solution_cache is not None else JsonFileSolutionCache(config.SOLUTION_CACHE_FILE, log)

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({"status": "ok"})

    @app.route('/slot_solution', methods=['POST'])
    def slot_solution():
        try:
            data = request.get_json(silent=True)
            req = SlotRequest(**data)
            solution = generate_slot_solution(req, source, cache, logger=log)
        except InvalidTag as e:
            return jsonify({"error": str(e)}), 400
        except PlaceSourceError as e:
            log.error("Place search failed: %s", e)
            return jsonify({"error": f"Place search failed: {e}"}), 502
        except (TypeError, ValueError, KeyError) as e:
            return jsonify({"error": f"Invalid input data: {e}"}), 400

        return jsonify(solution.to_dict())

    @app.route('/day_plan', methods=['POST'])
    def day_plan():
        try:
            data = request.get_json(silent=True)
            req = DayPlanRequest(**data)
            places = source.search(req.location, req.radius if req.radius > 0 else config.DEFAULT_RADIUS)
            selection = select_day_places(
                places, req.weekday, req.start_hour, req.end_hour,
                req.time_budget, req.money_budget, logger=log,
            )
        except PlaceSourceError as e:
            log.error("Place search failed: %s", e)
            return jsonify({"error": f"Place search failed: {e}"}), 502
        except (TypeError, ValueError, KeyError) as e:
            return jsonify({"error": f"Invalid input data: {e}"}), 400

        return jsonify({"day": req.weekday.name.capitalize(), **selection.to_dict()})

    return app
