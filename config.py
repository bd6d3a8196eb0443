# config.py - configuration loading and logging setup
import copy
import logging

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/default.yaml"


def get_default_config():
    """
    Provide default configuration used when the file is missing or incomplete

    Returns:
        dict: Default configuration values
    """
    return {
        'detection': {
            'min_detection_confidence': 0.5,
            'min_tracking_confidence': 0.5,
            'num_faces': 2,
            'num_hands': 2,
            'output_face_blendshapes': True,
            'face_model_path': 'models/face_landmarker.task',
            'hand_model_path': 'models/hand_landmarker.task',
        },
        'smoothing': {'factor': 0.35, 'fps_factor': 0.25, 'min_dt_s': 0.001},
        'gestures': {'thumbs_up_min_pinch': 0.1},
        'tracking': {'reset_center_on_face_loss': False},
        'camera': {'index': 0, 'width': 1280, 'height': 720, 'mirror_effect': True},
        'display': {
            'dashboard_width': 360,
            'show_landmarks': True,
            'colors': {
                'background': [45, 45, 45],
                'text_primary': [255, 255, 255],
                'text_secondary': [200, 200, 200],
                'face_landmarks': [0, 200, 0],
                'hand_landmarks': [255, 160, 0],
                'thumbs_up': [0, 200, 0],
                'pending': [0, 200, 200],
                'separator': [100, 100, 100],
            },
        },
        'logging': {
            'level': 'INFO',
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
            'log_dir': 'logs',
            'record_metrics': False,
        },
    }


def merge_config(base, override):
    """
    Recursively merge override into a copy of base

    Args:
        base: Default configuration dictionary
        override: Values loaded from file (may be partial)

    Returns:
        dict: Merged configuration
    """
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path=DEFAULT_CONFIG_PATH):
    """
    Load configuration from YAML file with fallback defaults

    Args:
        config_path: Path to configuration YAML file

    Returns:
        dict: Configuration dictionary
    """
    defaults = get_default_config()
    try:
        with open(config_path, 'r', encoding='utf-8') as file:
            loaded = yaml.safe_load(file) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found. Using defaults.", config_path)
        return defaults
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML in %s: %s. Using defaults.", config_path, e)
        return defaults

    if not isinstance(loaded, dict):
        logger.warning("Config file %s does not hold a mapping. Using defaults.", config_path)
        return defaults

    logger.info("Configuration loaded from %s", config_path)
    return merge_config(defaults, loaded)


def setup_logging(config=None):
    """
    Configure the root logger from the 'logging' config section

    Args:
        config: Configuration dictionary
    """
    logging_config = (config or {}).get('logging', {})
    level = getattr(logging, str(logging_config.get('level', 'INFO')).upper(), logging.INFO)
    log_format = logging_config.get('format', '%(asctime)s %(levelname)s %(name)s: %(message)s')

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicate handlers on repeated setup
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(log_format))
        root.addHandler(handler)
