"""Module for initializing settings related to the built-in ledger logger
Functions:
-get_logger
-overwrite_logger_level"""

import logging, coloredlogs
import os

VALID_LVLS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
_LOG_LVL = os.getenv('LOG_LEVEL', None)
if _LOG_LVL:
    assert _LOG_LVL in VALID_LVLS, "Log level {} not in valid levels {}".format(_LOG_LVL, VALID_LVLS)
    _LOG_LVL = getattr(logging, _LOG_LVL)
else:
    _LOG_LVL = logging.WARNING

format = '%(asctime)s.%(msecs)03d %(name)s[%(process)d][%(threadName)s] %(levelname)-2s %(message)s'

"""
Custom Log Levels
"""
#   Default levels
# 'CRITICAL': 50,
# 'ERROR': 40,
# 'WARNING': 30,
# 'INFO': 20,
# 'DEBUG' : 10

CUSTOM_LEVELS = {
    'TEST': 14,
    'NOTICE': 22,
}

for log_name, log_level in CUSTOM_LEVELS.items():
    logging.addLevelName(log_level, log_name)


def apply_custom_level(log, name: str, level: int):
    def _lvl_func(message, *args, **kws):
        if level >= log.getEffectiveLevel():
            log._log(level, message, args, **kws)

    setattr(log, name.lower(), _lvl_func)


"""
Custom Styling
"""

LEVEL_STYLES = {
    'critical': {'color': 'white', 'bold': True, 'background': 'red'},
    'error': {'color': 'red'},
    'warning': {'color': 'yellow'},
    'notice': {'color': 'magenta'},
    'info': {'color': 'white'},
    'debug': {'color': 'green'},
    'test': {'color': 'magenta'},
}
FIELD_STYLES = {
    'asctime': {'color': 'green'},
    'levelname': {'color': 'black', 'bright': True},
    'name': {'color': 'blue'},
    'threadName': {'color': 'cyan'}
}


class ColoredStreamHandler(logging.StreamHandler):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.setFormatter(
            coloredlogs.ColoredFormatter(format, level_styles=LEVEL_STYLES, field_styles=FIELD_STYLES)
        )


def _ignore(*args, **kwargs):
    pass


class MockLogger:
    def __getattr__(self, item):
        return _ignore


_ROOT_NAME = 'nftledger'
_configured = False


def _configure_root():
    global _configured
    if _configured:
        return

    root = logging.getLogger(_ROOT_NAME)
    root.addHandler(ColoredStreamHandler())

    filename = os.getenv('LOG_FILE')
    if filename:
        filehandler = logging.FileHandler(filename, delay=True)
        filehandler.setFormatter(logging.Formatter(format))
        root.addHandler(filehandler)

    root.propagate = False
    _configured = True


def get_logger(name=''):
    if _LOG_LVL < 0:
        return MockLogger()

    _configure_root()

    full_name = _ROOT_NAME if not name else '{}.{}'.format(_ROOT_NAME, name)
    log = logging.getLogger(full_name)
    log.setLevel(_LOG_LVL)

    for log_name, log_level in CUSTOM_LEVELS.items():
        apply_custom_level(log, log_name, log_level)

    return log


def overwrite_logger_level(level):
    global _LOG_LVL
    _LOG_LVL = level

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name == _ROOT_NAME or name.startswith(_ROOT_NAME + '.'):
            log = logging.getLogger(name)
            # Negative levels silence a logger completely
            log.setLevel(level if level >= 0 else logging.CRITICAL + 1)
