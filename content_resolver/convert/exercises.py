"""
Exercise content adapter.

An exercise renders as one composite node: its task followed by its
solution, each converted from its own serialized content. The content to
use for the task can be substituted, which is how historical revisions are
rendered with the current solution attached.
"""

from __future__ import annotations

from typing import Any

from ..core.nodes import ContentNode
from ..core.types import EntityRevision, Exercise, ExerciseGroup, ExerciseNode, GroupedExercise, SolutionLink
from .license import create_inline_license
from .state import convert_state

_CURRENT = object()


def create_exercise(
    exercise: ExerciseNode,
    index: int | None = None,
    content: Any = _CURRENT,
) -> ContentNode:
    """Fold an exercise and its solution into one `exercise` node.

    Args:
        exercise: The exercise or grouped exercise
        index: 0-based position inside an exercise group, if any
        content: Serialized task content to use instead of the current
            revision's (None renders an empty task)

    Returns:
        A node whose children are `task` and, if a solution exists, `solution`
    """
    if content is _CURRENT:
        content = _current_content(exercise.current_revision)

    children = [ContentNode(type="task", children=convert_state(content))]
    solution = _create_solution(exercise.solution)
    if solution is not None:
        children.append(solution)

    return ContentNode(
        type="exercise",
        children=tuple(children),
        attrs={
            "grouped": isinstance(exercise, GroupedExercise),
            "positionInGroup": index,
            "taskLicense": create_inline_license(exercise.license),
            "context": {
                "id": exercise.id,
                "solutionId": exercise.solution.id if exercise.solution else None,
                "parent": exercise.group_id if isinstance(exercise, GroupedExercise) else None,
            },
            "unrevisedRevisions": exercise.unrevised_revisions,
            "trashed": exercise.trashed or None,
        },
    )


def create_exercise_group(group: ExerciseGroup, content: Any = _CURRENT) -> ContentNode:
    """Adapt an exercise group: its own content plus each child exercise."""
    if content is _CURRENT:
        content = _current_content(group.current_revision)

    exercises = tuple(
        create_exercise(exercise, index)
        for index, exercise in enumerate(group.exercises)
        if not exercise.trashed
    )
    return ContentNode(
        type="exercise-group",
        children=exercises,
        attrs={
            "content": convert_state(content),
            "license": create_inline_license(group.license),
            "groupId": group.id,
        },
    )


def create_standalone_exercise(exercise: Exercise | GroupedExercise | ExerciseGroup) -> ContentNode:
    if isinstance(exercise, ExerciseGroup):
        return create_exercise_group(exercise)
    return create_exercise(exercise)


def _create_solution(solution: SolutionLink | None) -> ContentNode | None:
    if solution is None:
        return None
    return ContentNode(
        type="solution",
        children=convert_state(solution.content),
        attrs={
            "license": create_inline_license(solution.license),
            "trashed": solution.trashed or None,
            "unpublished": not solution.has_current_revision or None,
        },
    )


def _current_content(revision: EntityRevision | None) -> str | None:
    if revision is None:
        return None
    return revision.content
