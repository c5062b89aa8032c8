"""
Demo of spherical k-means clustering.

This example shows how to:
1. Generate synthetic bag-of-words documents around a few topics
2. Cluster them with spherical k-means
3. Inspect partitions, concept vectors and phase timings
4. Plot concept directions and quality per iteration
"""

import torch
import matplotlib.pyplot as plt
import numpy as np

# Add parent directory to path for imports
import sys
sys.path.append('..')

from spkmeans import SphericalKMeans, PhaseTimer, plot_concepts_2d, plot_quality_history


VOCABULARY = [
    'goal', 'match', 'league', 'coach', 'striker', 'season',
    'vote', 'senate', 'party', 'ballot', 'policy', 'election',
    'cpu', 'kernel', 'compiler', 'memory', 'cache', 'thread',
]


def generate_documents(n_docs_per_topic=100, n_topics=3, words_per_topic=6, noise_level=0.3):
    """Generate term-frequency documents where each topic owns a block of words."""
    torch.manual_seed(42)

    n_words = n_topics * words_per_topic
    data_list = []
    true_labels = []

    for t in range(n_topics):
        counts = torch.zeros(n_docs_per_topic, n_words)
        block = slice(t * words_per_topic, (t + 1) * words_per_topic)
        counts[:, block] = torch.poisson(torch.full((n_docs_per_topic, words_per_topic), 3.0))

        # Stray words from the whole vocabulary
        counts += torch.poisson(torch.full((n_docs_per_topic, n_words), noise_level))

        data_list.append(counts)
        true_labels.extend([t] * n_docs_per_topic)

    X = torch.cat(data_list, dim=0)
    true_labels = torch.tensor(true_labels)

    # Shuffle
    perm = torch.randperm(len(X))
    return X[perm], true_labels[perm]


def confusion(true_labels, pred_labels, n_clusters):
    """Rows are true topics, columns are predicted partitions."""
    cm = np.zeros((n_clusters, n_clusters), dtype=np.int64)
    np.add.at(cm, (np.asarray(true_labels), np.asarray(pred_labels)), 1)
    return cm


def print_partitions(result, vocabulary):
    print("\n=== Partitions ===")
    alignment = result.alignment()
    for k, partition in enumerate(result.partitions):
        top = result.top_dimensions(k, n=5, vocabulary=vocabulary) if not partition.is_empty else []
        words = ', '.join(f"{w} ({weight:.2f})" for w, weight in top)
        print(f"[Partition {k}] size={partition.size:4d} "
              f"alignment={alignment[k].item():.4f}  top words: {words}")


def main():
    X, true_labels = generate_documents()
    n_topics = 3
    print(f"Generated {X.shape[0]} documents over {X.shape[1]} words")

    timer = PhaseTimer()
    model = SphericalKMeans(n_clusters=n_topics, init='random', random_state=0,
                            verbose=1, timer=timer, device='cpu')
    model.fit(X, word_count=len(VOCABULARY))
    result = model.result_

    print(result)
    print_partitions(result, VOCABULARY)

    print("\nConfusion matrix (rows=true, cols=pred):")
    print(confusion(true_labels.numpy(), result.labels.cpu().numpy(), n_topics))

    print("\nPhase timings:")
    for name, entry in result.timings.items():
        print(f"  {name:10s} {entry['ms']:8.3f} ms ({entry['percent']:.1f}%)")

    fig, axes = plt.subplots(1, 2, figsize=(13, 6))
    plot_concepts_2d(result, ax=axes[0], dims=(0, 6),
                     title='Documents and concepts: "goal" vs "vote"')
    plot_quality_history(result, ax=axes[1])
    plt.tight_layout()
    plt.savefig('spkmeans_demo.png', dpi=150, bbox_inches='tight')
    plt.show()


if __name__ == "__main__":
    main()
