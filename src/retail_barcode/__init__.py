"""
Пакет retail_barcode
====================

Кодировщик штрихкодов товаров: UPC-A, EAN-13 и Code 128 (набор B) в SVG.

Этот пакет предоставляет:
    - Нормализацию кода и проверку/добавление контрольной цифры
    - Кодирование по неизменяемым таблицам символик
    - Векторный рендеринг (SVG) с подписью и растровый предпросмотр (PNG)
    - Фасад запрос/ответ для HTTP-обработчиков
    - Централизованное логирование и загрузку конфигурации

Хранение готового изображения (медиатека, привязка к товару) остаётся на
стороне вызывающего кода: пакет только возвращает данные.

Пример базового использования:
    >>> from retail_barcode import generate_barcode, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> response = generate_barcode({"code": "03600029145", "type": "upc-a"})
    >>> response["code"]
    '036000291452'
    >>> logger.info("SVG: %d байт", len(response["svg"]))

Управление конфигурацией:
    >>> import os
    >>> os.environ['RETAIL_BARCODE_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from retail_barcode import load_config, RenderOptions
    >>>
    >>> config = load_config()
    >>> defaults = RenderOptions.from_config(config)

Версия: 0.1.0
Лицензия: MIT
Python: 3.9+
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "Retail Barcode Development Team"
__description__ = "Product barcode encoder (UPC-A, EAN-13, Code 128 Set B) with SVG output"
__license__ = "MIT"
__python_requires__ = ">=3.9"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

LOG_LEVEL_ENV = "RETAIL_BARCODE_LOG_LEVEL"
CONFIG_PATH_ENV = "RETAIL_BARCODE_CONFIG"
DEFAULT_CONFIG_FILE = "retail_barcode.json"

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================


def _setup_logging() -> None:
    """
    Инициализировать логирование пакета.

    Настраивает логгер ``retail_barcode`` с обработчиком stderr и форматом
    ``[время] УРОВЕНЬ [модуль.функция:строка] сообщение``. Уровень задаётся
    переменной окружения RETAIL_BARCODE_LOG_LEVEL (DEBUG, INFO, WARNING,
    ERROR, CRITICAL; по умолчанию INFO).

    Идемпотентна: повторные вызовы не добавляют обработчиков.
    """
    log_level_str = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    package_logger = logging.getLogger("retail_barcode")
    if package_logger.handlers:
        return

    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    # Не дублировать записи в корневом логгере приложения
    package_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён ``retail_barcode``.

    Аргументы:
        module_name: Обычно ``__name__``; имена вне пакета получают
            префикс ``retail_barcode.``.

    Пример:
        >>> get_logger("my_plugin").name
        'retail_barcode.my_plugin'
    """
    if module_name.startswith("retail_barcode"):
        full_name = module_name
    elif module_name == "__main__":
        full_name = "retail_barcode.main"
    else:
        full_name = f"retail_barcode.{module_name.lstrip('.')}"
    return logging.getLogger(full_name)


_setup_logging()

# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

_DEFAULT_CONFIG: Dict[str, Any] = {
    "render_defaults": {
        "width": 200,
        "height": 80,
        "margin": 10,
        "display_value": True,
        "font_size": 12,
        "background_color": "#FFFFFF",
        "line_color": "#000000",
    },
}


def _default_config() -> Dict[str, Any]:
    config = dict(_DEFAULT_CONFIG)
    config["render_defaults"] = dict(_DEFAULT_CONFIG["render_defaults"])
    return config


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить конфигурацию из JSON-файла поверх значений по умолчанию.

    Порядок поиска файла: аргумент ``config_path``, переменная окружения
    RETAIL_BARCODE_CONFIG, ``retail_barcode.json`` в текущем каталоге.
    Недопустимый JSON или нечитаемый файл не прерывают работу: в лог
    пишется предупреждение и возвращаются настройки по умолчанию.

    Ключи конфигурации:
        - render_defaults: dict - значения RenderOptions по умолчанию
          (объединяются поключево с настройками по умолчанию)

    Возвращает:
        Новый словарь; ``_DEFAULT_CONFIG`` не изменяется.
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path(os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_FILE))

    config = _default_config()

    if not config_path.exists():
        logger.debug("Config file %s not found, using defaults", config_path)
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
        if not isinstance(user_config, dict):
            raise ValueError(
                f"config must be a JSON object, got {type(user_config).__name__}"
            )
        render_defaults = user_config.pop("render_defaults", None) or {}
        if not isinstance(render_defaults, dict):
            raise ValueError("render_defaults must be a JSON object")
        config.update(user_config)
        config["render_defaults"].update(render_defaults)
        logger.info("Configuration loaded from %s", config_path)
    except json.JSONDecodeError as e:
        logger.warning(
            "Could not parse %s: invalid JSON at line %d, column %d; using defaults",
            config_path,
            e.lineno,
            e.colno,
        )
        return _default_config()
    except (OSError, ValueError) as e:
        logger.warning("Could not load %s: %s; using defaults", config_path, e)
        return _default_config()

    return config


# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================

from retail_barcode.barcodegen import (  # noqa: E402
    BarcodeGenerator,
    BarcodeGenError,
    ChecksumMismatchError,
    InvalidLengthError,
    InvalidRenderOptionsError,
    InvalidRequestError,
    UnsupportedCharacterError,
    UnsupportedSymbologyError,
    check_digit,
    encode,
    encode_barcode,
    generate_barcode,
    get_encoder,
    normalize,
    render_png,
    render_svg,
)
from retail_barcode.model.barcode import (  # noqa: E402
    BarcodeRequest,
    BarcodeResult,
    BarPattern,
    NormalizedCode,
    RenderedImage,
    RenderOptions,
)
from retail_barcode.model.enums import Symbology  # noqa: E402

__all__ = [
    "__version__",
    "get_logger",
    "load_config",
    "BarcodeGenerator",
    "encode_barcode",
    "generate_barcode",
    "normalize",
    "check_digit",
    "encode",
    "get_encoder",
    "render_svg",
    "render_png",
    "Symbology",
    "BarcodeRequest",
    "BarcodeResult",
    "BarPattern",
    "NormalizedCode",
    "RenderedImage",
    "RenderOptions",
    "BarcodeGenError",
    "InvalidLengthError",
    "UnsupportedCharacterError",
    "ChecksumMismatchError",
    "UnsupportedSymbologyError",
    "InvalidRenderOptionsError",
    "InvalidRequestError",
]
