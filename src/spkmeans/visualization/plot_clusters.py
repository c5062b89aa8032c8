"""
Visualization of spherical k-means results.

Provides a 2D view of documents and concept directions on the unit circle,
and a plot of quality across refinement iterations.
"""

from typing import Optional, List, Sequence, Union
import matplotlib.pyplot as plt
import numpy as np

from ..base.data_structures import ClusterResult


def plot_concepts_2d(result: ClusterResult,
                     ax: Optional[plt.Axes] = None,
                     dims: Sequence[int] = (0, 1),
                     colors: Optional[List[str]] = None,
                     alpha: float = 0.7,
                     point_size: int = 50,
                     show_circle: bool = True,
                     show_legend: bool = True,
                     title: Optional[str] = None) -> plt.Axes:
    """Plot normalized documents and concept directions in two word dimensions.

    Args:
        result: Result of a clustering run
        ax: Matplotlib axes (created if None)
        dims: Pair of word indices to project onto
        colors: List of colors for clusters
        alpha: Point transparency
        point_size: Size of document markers
        show_circle: Whether to draw the unit circle
        show_legend: Whether to show legend
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if len(dims) != 2:
        raise ValueError(f"Expected two dimensions to plot, got {len(dims)}")
    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 7))

    i, j = dims
    docs = result.documents.detach().cpu().numpy()
    labels = result.labels.cpu().numpy()
    concepts = result.concepts.detach().cpu().numpy()
    n_clusters = result.n_clusters

    if colors is None:
        cmap = plt.get_cmap('tab10' if n_clusters <= 10 else 'tab20')
        colors = [cmap(k % cmap.N) for k in range(n_clusters)]

    if show_circle:
        theta = np.linspace(0, 2 * np.pi, 200)
        ax.plot(np.cos(theta), np.sin(theta), color='lightgray', linewidth=1, zorder=0)

    for k in range(n_clusters):
        mask = labels == k
        if mask.any():
            ax.scatter(docs[mask, i], docs[mask, j],
                       c=[colors[k]],
                       s=point_size,
                       alpha=alpha,
                       edgecolors='black',
                       linewidth=0.5,
                       label=f'Cluster {k}')
        if np.any(concepts[k] != 0):
            ax.annotate('', xy=(concepts[k, i], concepts[k, j]), xytext=(0, 0),
                        arrowprops=dict(arrowstyle='->', color=colors[k], linewidth=2))

    ax.set_xlabel(f'Word {i}')
    ax.set_ylabel(f'Word {j}')
    ax.set_aspect('equal')

    if title:
        ax.set_title(title)

    if show_legend:
        ax.legend()

    return ax


def plot_quality_history(history: Union[ClusterResult, Sequence[float]],
                         ax: Optional[plt.Axes] = None,
                         marker: str = 'o',
                         title: Optional[str] = None) -> plt.Axes:
    """Plot quality per iteration; iteration 0 is the initial partition.

    Args:
        history: A ClusterResult or a sequence of quality values
        ax: Matplotlib axes (created if None)
        marker: Line marker
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if isinstance(history, ClusterResult):
        values = history.quality_history
    else:
        values = list(history)

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 4))

    ax.plot(range(len(values)), values, marker=marker)
    ax.set_xlabel('Iteration')
    ax.set_ylabel('Quality')
    ax.set_title(title or 'Quality per iteration')

    return ax
