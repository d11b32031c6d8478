from __future__ import annotations

import math
import random
import unittest

from paper_library import (
    IndexedDocument,
    RankedDocument,
    SimilarityMetric,
    SimilarityRanker,
    cosine_similarity,
    normalize_metric,
    rank,
    similarity,
)


def _ids(results: list[RankedDocument]) -> list[str]:
    return [item.id for item in results]


class CosineSimilarityTests(unittest.TestCase):
    def test_self_similarity_is_one(self) -> None:
        rng = random.Random(7)
        for _ in range(25):
            vector = [rng.uniform(-5, 5) for _ in range(8)]
            self.assertAlmostEqual(cosine_similarity(vector, vector), 1.0, places=9)

    def test_symmetry(self) -> None:
        rng = random.Random(11)
        for _ in range(25):
            left = [rng.uniform(-1, 1) for _ in range(5)]
            right = [rng.uniform(-1, 1) for _ in range(5)]
            self.assertEqual(cosine_similarity(left, right), cosine_similarity(right, left))

    def test_zero_vector_scores_zero(self) -> None:
        zero = [0.0, 0.0, 0.0]
        self.assertEqual(cosine_similarity(zero, [1.0, 2.0, 3.0]), 0.0)
        self.assertEqual(cosine_similarity([1.0, 2.0, 3.0], zero), 0.0)
        self.assertEqual(cosine_similarity(zero, zero), 0.0)

    def test_mismatched_or_empty_vectors_score_zero(self) -> None:
        self.assertEqual(cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0]), 0.0)
        self.assertEqual(cosine_similarity([], []), 0.0)

    def test_opposite_vectors(self) -> None:
        self.assertAlmostEqual(cosine_similarity([1, 1], [-1, -1]), -1.0)

    def test_metric_dispatch_and_normalization(self) -> None:
        self.assertEqual(similarity(SimilarityMetric.DOT, [1, 2], [3, 4]), 11)
        self.assertAlmostEqual(similarity(SimilarityMetric.L2, [0, 0], [3, 4]), -5.0)
        self.assertEqual(normalize_metric(" Cosine "), SimilarityMetric.COSINE)
        self.assertEqual(normalize_metric("euclidean"), SimilarityMetric.L2)
        with self.assertRaises(ValueError):
            normalize_metric("manhattan")
        with self.assertRaises(ValueError):
            normalize_metric(3)  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            normalize_metric("dot", supported={SimilarityMetric.COSINE})
        with self.assertRaises(TypeError):
            normalize_metric("dist", aliases={"dist": SimilarityMetric.L2})  # type: ignore[call-arg]


class RankScenarioTests(unittest.TestCase):
    def test_orthogonal_candidates(self) -> None:
        candidates = [IndexedDocument("a", [1, 0]), IndexedDocument("b", [0, 1])]
        results = rank([1, 0], candidates, 2)

        self.assertEqual(_ids(results), ["a", "b"])
        self.assertAlmostEqual(results[0].score, 1.0)
        self.assertAlmostEqual(results[1].score, 0.0)

    def test_top_k_truncates_after_sort(self) -> None:
        candidates = [IndexedDocument("x", [2, 2]), IndexedDocument("y", [-1, -1])]
        results = rank([1, 1], candidates, 1)

        self.assertEqual(_ids(results), ["x"])
        self.assertAlmostEqual(results[0].score, 1.0)

    def test_empty_query_returns_nothing(self) -> None:
        candidates = [IndexedDocument("a", [1, 0])]
        self.assertEqual(rank([], candidates, 5), [])

    def test_absent_vector_never_returned(self) -> None:
        candidates = [IndexedDocument("a", [1, 0]), IndexedDocument("none")]
        results = rank([1, 0], candidates, 10)
        self.assertEqual(_ids(results), ["a"])

    def test_equal_scores_keep_input_order(self) -> None:
        candidates = [
            IndexedDocument("first", [3, 4]),
            IndexedDocument("best", [1, 0]),
            IndexedDocument("second", [3, 4]),
        ]
        results = rank([1, 0], candidates, 3)

        self.assertEqual(_ids(results), ["best", "first", "second"])
        self.assertEqual(results[1].score, results[2].score)

    def test_identical_vectors_matching_query(self) -> None:
        candidates = [IndexedDocument("p", [0.5, 0.5]), IndexedDocument("q", [0.5, 0.5])]
        self.assertEqual(_ids(rank([1, 1], candidates, 2)), ["p", "q"])


class RankEdgeCaseTests(unittest.TestCase):
    def test_empty_candidates(self) -> None:
        self.assertEqual(rank([1, 0], [], 3), [])

    def test_non_positive_top_k(self) -> None:
        candidates = [IndexedDocument("a", [1, 0])]
        self.assertEqual(rank([1, 0], candidates, 0), [])
        self.assertEqual(rank([1, 0], candidates, -2), [])

    def test_dimension_mismatch_is_excluded(self) -> None:
        candidates = [
            IndexedDocument("short", [1]),
            IndexedDocument("ok", [1, 0]),
            IndexedDocument("long", [1, 0, 0]),
        ]
        self.assertEqual(_ids(rank([1, 0], candidates, 10)), ["ok"])

    def test_non_finite_values(self) -> None:
        candidates = [
            IndexedDocument("nan", [math.nan, 1.0]),
            IndexedDocument("inf", [math.inf, 0.0]),
            IndexedDocument("ok", [1.0, 0.0]),
        ]
        self.assertEqual(_ids(rank([1.0, 0.0], candidates, 10)), ["ok"])
        self.assertEqual(rank([math.nan, 1.0], candidates, 10), [])

    def test_zero_query_scores_everything_zero(self) -> None:
        candidates = [IndexedDocument("a", [1, 0]), IndexedDocument("b", [0, 1])]
        results = rank([0, 0], candidates, 5)

        self.assertEqual(_ids(results), ["a", "b"])
        self.assertTrue(all(item.score == 0.0 for item in results))

    def test_non_numeric_query_returns_nothing(self) -> None:
        candidates = [IndexedDocument("a", [1, 0])]
        self.assertEqual(rank(["x", "y"], candidates, 1), [])  # type: ignore[list-item]
        self.assertEqual(rank(None, candidates, 1), [])  # type: ignore[arg-type]

    def test_generator_candidates(self) -> None:
        candidates = [
            IndexedDocument("b", [0, 1]),
            IndexedDocument("none"),
            IndexedDocument("a", [1, 0]),
        ]

        results = rank([1, 0], (document for document in candidates), 5)
        bound = SimilarityRanker().rank([1, 0], iter(candidates), 1)

        self.assertEqual(_ids(results), ["a", "b"])
        self.assertEqual(_ids(bound), ["a"])

    def test_rank_does_not_mutate_input(self) -> None:
        candidates = [IndexedDocument("b", [0, 1]), IndexedDocument("a", [1, 0])]
        before = list(candidates)
        rank([1, 0], candidates, 2)
        self.assertEqual(candidates, before)


class RankPropertyTests(unittest.TestCase):
    def _random_candidates(self, rng: random.Random) -> list[IndexedDocument]:
        candidates = []
        for index in range(rng.randint(0, 30)):
            roll = rng.random()
            if roll < 0.15:
                vector = None
            elif roll < 0.3:
                vector = [rng.choice([0.0, 1.0]) for _ in range(rng.choice([2, 4]))]
            else:
                vector = [float(rng.randint(-2, 2)) for _ in range(3)]
            candidates.append(IndexedDocument(f"d{index}", vector))
        return candidates

    def test_random_inputs_respect_invariants(self) -> None:
        rng = random.Random(2024)
        for _ in range(200):
            query = [float(rng.randint(-2, 2)) for _ in range(3)]
            candidates = self._random_candidates(rng)
            top_k = rng.randint(1, 12)
            results = rank(query, candidates, top_k)

            scorable = [doc for doc in candidates if doc.vector is not None and len(doc.vector) == 3]
            self.assertLessEqual(len(results), min(top_k, len(scorable)))
            self.assertEqual(len(results), min(top_k, len(scorable)))

            for earlier, later in zip(results, results[1:]):
                self.assertGreaterEqual(earlier.score, later.score)
                if earlier.score == later.score:
                    self.assertLess(
                        candidates.index(earlier.document),
                        candidates.index(later.document),
                    )

            for item in results:
                self.assertIsNotNone(item.document.vector)
                self.assertEqual(len(item.document.vector), 3)
                self.assertGreaterEqual(item.score, -1.0 - 1e-12)
                self.assertLessEqual(item.score, 1.0 + 1e-12)


class SimilarityRankerTests(unittest.TestCase):
    def test_bound_metric(self) -> None:
        candidates = [IndexedDocument("a", [1, 0]), IndexedDocument("b", [2, 0])]

        self.assertEqual(_ids(SimilarityRanker().rank([1, 0], candidates, 2)), ["a", "b"])
        self.assertEqual(_ids(SimilarityRanker("dot").rank([1, 0], candidates, 2)), ["b", "a"])
        self.assertEqual(
            _ids(SimilarityRanker(SimilarityMetric.L2).rank([1, 0], candidates, 2)),
            ["a", "b"],
        )

    def test_document_vector_is_frozen_copy(self) -> None:
        raw = [1, 2]
        document = IndexedDocument("a", raw)
        raw[0] = 99

        self.assertEqual(document.vector, (1.0, 2.0))
        self.assertTrue(document.has_vector)
        self.assertFalse(IndexedDocument("b").has_vector)


if __name__ == "__main__":
    unittest.main()
