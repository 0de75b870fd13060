import logging
from sqlalchemy.orm import Session


class BaseService:
    """
    Common plumbing for services: the request-scoped session and a module logger.
    Services own their transactions: each public mutation commits once.
    """

    def __init__(self, db: Session):
        self.db = db
        self._logger = logging.getLogger(self.__class__.__module__)

    def _commit(self):
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
