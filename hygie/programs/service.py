"""Program engine facade for host applications.

Bundles the injected catalog with a per-program lock registry and holds the
latest value of every program it has seen. Each operation reads that value,
applies the domain function and stores the result while holding the
program's lock, so concurrent requests on one program observe each other's
writes (a slot is synthesized once, completions are never lost). The host
still owns persistence: ``track`` a loaded Program, call the engine, store
the returned value, ``release`` the program when it leaves memory.
"""

import random
from collections.abc import Callable
from typing import TypeVar

from loguru import logger

from hygie.programs.catalog import load_catalog
from hygie.programs.locking import ProgramLockRegistry
from hygie.programs.models import (
    CompletionOutcome,
    ExerciseCatalog,
    Program,
    SynthesisResult,
)
from hygie.programs.progression import record_completion, rewind_to_week
from hygie.programs.schemas import ClientProfile
from hygie.programs.skeleton import create_program
from hygie.programs.swap import swap_exercise
from hygie.programs.synthesizer import synthesize_session

T = TypeVar("T", SynthesisResult, CompletionOutcome)


class ProgramEngine:
    """Serialized access to the program engine operations.

    Thread-safe: operations on the same program id run one at a time against
    the engine's latest value of that program, operations on different
    programs run in parallel.
    """

    def __init__(
        self,
        catalog: ExerciseCatalog,
        locks: ProgramLockRegistry | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize the engine.

        Args:
            catalog: Exercise catalog used for every synthesis
            locks: Lock registry (a private one when omitted)
            rng: Random source for exercise selection
        """
        self.catalog = catalog
        self.locks = locks if locks is not None else ProgramLockRegistry()
        self._rng = rng or random.Random()
        self._programs: dict[str, Program] = {}

    @classmethod
    def from_settings(cls) -> "ProgramEngine":
        """Build an engine with the catalog configured in settings."""
        return cls(catalog=load_catalog())

    # -----------------------------
    # Program registry
    # -----------------------------
    def track(self, program: Program) -> Program:
        """Make ``program`` the engine's current value for its id.

        Use after loading a program from storage. Replaces any value the
        engine already holds for that id.
        """
        with self.locks.lock_for(program.id):
            self._programs[program.id] = program
        return program

    def get_program(self, program_id: str) -> Program | None:
        with self.locks.lock_for(program_id):
            return self._programs.get(program_id)

    def release(self, program_id: str) -> None:
        """Drop the held value and the lock of a program.

        Call once no request for the program is in flight.
        """
        with self.locks.lock_for(program_id):
            self._programs.pop(program_id, None)
        self.locks.forget(program_id)
        logger.debug("Program released", program_id=program_id)

    def _apply(self, program: Program, operation: Callable[[Program], T]) -> T:
        """Run an operation on the latest value of a program and store the result.

        The value passed by the caller is only used when the engine does not
        hold the program yet.
        """
        with self.locks.lock_for(program.id):
            current = self._programs.get(program.id, program)
            result = operation(current)
            self._programs[program.id] = result.program
            return result

    # -----------------------------
    # Operations
    # -----------------------------
    def create_program(
        self,
        profile: ClientProfile,
        duration_weeks: int,
        sessions_per_week: int,
        name: str | None = None,
    ) -> Program:
        program = create_program(profile, duration_weeks, sessions_per_week, name=name)
        return self.track(program)

    def synthesize(
        self,
        profile: ClientProfile,
        program: Program,
        week_number: int,
        session_number: int,
    ) -> SynthesisResult:
        return self._apply(
            program,
            lambda current: synthesize_session(
                profile,
                current,
                week_number,
                session_number,
                self.catalog,
                rng=self._rng,
            ),
        )

    def next_session(self, profile: ClientProfile, program: Program) -> SynthesisResult:
        """Synthesize the session under the program cursor."""
        return self._apply(
            program,
            lambda current: synthesize_session(
                profile,
                current,
                current.current_week,
                current.current_session,
                self.catalog,
                rng=self._rng,
            ),
        )

    def swap(
        self,
        profile: ClientProfile,
        program: Program,
        week_number: int,
        session_number: int,
        exercise_id: str,
    ) -> SynthesisResult:
        return self._apply(
            program,
            lambda current: swap_exercise(profile, current, week_number, session_number, exercise_id, self.catalog),
        )

    def complete(
        self,
        profile: ClientProfile,
        program: Program,
        week_number: int,
        session_number: int,
    ) -> CompletionOutcome:
        """Record a completion and apply a failed gate by rewinding the program."""
        return self._apply(
            program,
            lambda current: self._complete(profile, current, week_number, session_number),
        )

    def _complete(
        self,
        profile: ClientProfile,
        program: Program,
        week_number: int,
        session_number: int,
    ) -> CompletionOutcome:
        outcome = record_completion(program, profile, week_number, session_number)
        if outcome.gate is None or outcome.gate.can_proceed or outcome.gate.repeat_week is None:
            return outcome

        logger.warning(
            "Gate failed, rewinding program",
            program_id=program.id,
            reason=outcome.gate.reason,
            repeat_week=outcome.gate.repeat_week,
        )
        return CompletionOutcome(
            program=rewind_to_week(outcome.program, outcome.gate.repeat_week),
            gate=outcome.gate,
        )
