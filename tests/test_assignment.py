# tests/test_assignment.py
"""
U4 — CosineAssignment

Covers:
- nearest concept by cosine similarity
- ties resolve to the lowest partition index
- degenerate (zero) concepts never win
- all concepts are read before any is changed
"""

from __future__ import annotations

import torch

from spkmeans.assignments.cosine import CosineAssignment
from spkmeans.representations.concept import ConceptRepresentation


def _reps(concepts, device):
    reps = []
    for c in concepts:
        rep = ConceptRepresentation(len(c), device)
        rep.concept = torch.tensor(c, dtype=torch.float32)
        reps.append(rep)
    return reps


def test_assigns_to_most_similar(torch_device):
    reps = _reps([[1.0, 0.0], [0.0, 1.0]], torch_device)
    X = torch.tensor([[0.9, 0.1], [0.2, 0.8], [1.0, 0.0]])
    labels = CosineAssignment().compute_assignments(X, reps)
    assert labels.tolist() == [0, 1, 0]
    assert labels.dtype == torch.long


def test_tie_goes_to_lowest_index(torch_device):
    s = 2 ** -0.5
    reps = _reps([[1.0, 0.0], [0.0, 1.0]], torch_device)
    X = torch.tensor([[s, s]])
    assert CosineAssignment().compute_assignments(X, reps).tolist() == [0]

    # Identical concepts: always the first one
    reps = _reps([[0.0, 1.0], [1.0, 0.0], [1.0, 0.0]], torch_device)
    X = torch.tensor([[1.0, 0.0], [0.6, 0.8]])
    assert CosineAssignment().compute_assignments(X, reps).tolist() == [1, 0]


def test_tie_break_on_similarity_matrix():
    S = torch.tensor([
        [0.5, 0.5, 0.5],
        [0.1, 0.7, 0.7],
        [0.2, 0.1, 0.9],
    ])
    assert CosineAssignment.assign_from_similarities(S).tolist() == [0, 1, 2]


def test_degenerate_concept_never_wins(torch_device):
    reps = _reps([[0.0, 0.0], [0.0, 1.0]], torch_device)
    X = torch.tensor([[1.0, 0.0], [0.0, 1.0], [-1.0, 0.0]])
    labels = CosineAssignment().compute_assignments(X, reps)
    assert labels.tolist() == [1, 1, 1]


def test_similarity_matrix_shape(torch_device):
    reps = _reps([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]], torch_device)
    X = torch.eye(3)
    S = CosineAssignment.similarity_matrix(X, reps)
    assert S.shape == (3, 2)
    assert torch.allclose(S[2], torch.zeros(2))


def test_assignment_does_not_touch_concepts(torch_device):
    reps = _reps([[1.0, 0.0], [0.0, 1.0]], torch_device)
    before = [r.concept.clone() for r in reps]
    CosineAssignment().compute_assignments(torch.rand(10, 2), reps)
    for r, b in zip(reps, before):
        assert torch.equal(r.concept, b)
