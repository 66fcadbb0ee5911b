from sqlalchemy import func

from comicshare import db


class ToggleRepository:
    """Join-table rows whose existence is the whole state."""

    def __init__(self, model, owner_field, target_field):
        self.model = model
        self.owner_field = owner_field
        self.target_field = target_field

    def _filter(self, owner_id, target_id):
        return self.model.query.filter_by(
            **{self.owner_field: owner_id, self.target_field: target_id}
        )

    def get(self, owner_id, target_id):
        return self._filter(owner_id, target_id).first()

    def exists(self, owner_id, target_id):
        return self.get(owner_id, target_id) is not None

    def add(self, owner_id, target_id):
        row = self.model(**{self.owner_field: owner_id, self.target_field: target_id})
        db.session.add(row)
        db.session.flush()
        return row

    def remove(self, owner_id, target_id):
        deleted = self._filter(owner_id, target_id).delete(synchronize_session=False)
        db.session.flush()
        return deleted

    def count_for_target(self, target_id):
        column = getattr(self.model, self.target_field)
        return (
            db.session.query(func.count()).select_from(self.model)
            .filter(column == target_id)
            .scalar()
            or 0
        )

    def count_for_owner(self, owner_id):
        column = getattr(self.model, self.owner_field)
        return (
            db.session.query(func.count()).select_from(self.model)
            .filter(column == owner_id)
            .scalar()
            or 0
        )
