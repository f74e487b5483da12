# pyright: reportUnusedImport=false
from dtobox.missing import Missing, is_missing
from dtobox.payload import PayloadError, load_payload, parse_payload
from dtobox.setter import NoPathAssignedError, Setter, apply_path
from dtobox.validation import RuleValidator, ValidationError, Validator, validation_rule
from dtobox.data import Data, NotInitializedError, UnknownPropertyError
