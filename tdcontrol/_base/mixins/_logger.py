import logging


class LoggerMixin:
    @property
    def logger(self):
        r""" A logger named after the class, e.g. ``tdcontrol.GreedyGQ``. """
        return logging.getLogger(f"tdcontrol.{self.__class__.__name__}")
