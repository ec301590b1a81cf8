from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, pre_load

from movies.model.movies_filter_params import MoviesFilterParams


class GenreMoviesQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    genres = fields.String(load_default=None)
    min_rating = fields.Float(data_key="minRating", load_default=None, allow_nan=False)
    max_rating = fields.Float(data_key="maxRating", load_default=None, allow_nan=False)

    @pre_load
    def drop_blank_values(self, data, **kwargs):
        # filter forms send every field, unused ones blank
        return {
            key: value
            for key, value in data.items()
            if not (isinstance(value, str) and not value.strip())
        }

    @post_load
    def make_params(self, data, **kwargs) -> MoviesFilterParams:
        genres = None
        if data.get("genres"):
            genres = [g.strip() for g in data["genres"].split(",") if g.strip()]

        return MoviesFilterParams(
            genres=genres or None,
            min_rating=data.get("min_rating"),
            max_rating=data.get("max_rating"),
        )


def not_blank(value: str):
    if not value.strip():
        raise ValidationError("Must not be blank.")


class MyCollectionQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True, validate=not_blank)


class InsertResultSchema(Schema):
    acknowledged = fields.Boolean()
    insertedId = fields.String()


class UpdateResultSchema(Schema):
    acknowledged = fields.Boolean()
    matchedCount = fields.Integer()
    modifiedCount = fields.Integer()
    upsertedId = fields.String(allow_none=True)


class DeleteResultSchema(Schema):
    success = fields.Boolean()
    message = fields.String()
    deletedCount = fields.Integer()
