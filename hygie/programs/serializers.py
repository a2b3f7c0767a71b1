"""Serializers for Program - JSON serialization utilities."""

from pydantic import TypeAdapter

from hygie.programs.models import Program
from hygie.programs.validators import validate_program

_program_adapter = TypeAdapter(Program)


def serialize_program(program: Program) -> dict:
    """Serialize Program to JSON-serializable dict.

    Args:
        program: Program to serialize

    Returns:
        JSON-serializable dictionary
    """
    return _program_adapter.dump_python(program, mode="json")


def deserialize_program(data: dict) -> Program:
    """Deserialize dict to Program.

    Args:
        data: Dictionary containing program data

    Returns:
        Program object

    Raises:
        pydantic.ValidationError: If the data does not match the Program shape
        ProgramInvariantError: If the cursor or layout invariants are violated
    """
    program = _program_adapter.validate_python(data)
    validate_program(program)
    return program
