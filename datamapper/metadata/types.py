from enum import Enum

class ColumnType(str, Enum):
    INCREMENTS = "increments"
    BIG_INCREMENTS = "bigIncrements"
    INTEGER = "integer"
    BIG_INTEGER = "bigInteger"
    SMALL_INTEGER = "smallInteger"
    TINY_INTEGER = "tinyInteger"
    STRING = "string"
    CHAR = "char"
    TEXT = "text"
    LONG_TEXT = "longText"
    BOOLEAN = "boolean"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    DATE = "date"
    DATE_TIME = "dateTime"
    TIME = "time"
    TIMESTAMP = "timestamp"
    JSON = "json"
    BINARY = "binary"
    UUID = "uuid"

class RelationType(str, Enum):
    HAS_ONE = "hasOne"
    HAS_MANY = "hasMany"
    HAS_MANY_THROUGH = "hasManyThrough"
    BELONGS_TO = "belongsTo"
    BELONGS_TO_MANY = "belongsToMany"
    MORPH_TO = "morphTo"
    MORPH_ONE = "morphOne"
    MORPH_MANY = "morphMany"
    MORPH_TO_MANY = "morphToMany"
    MORPHED_BY_MANY = "morphedByMany"
