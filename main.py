from __future__ import annotations
import io
import random
from typing import List

import matplotlib.pyplot as plt
import networkx as nx
import numpy as np
import pandas as pd
import streamlit as st

from text_summarizer.config import MAX_SENTENCES, MIN_SENTENCES, PreprocessConfig, RankConfig, settings
from text_summarizer.datatypes import KeyElements, Sentence
from text_summarizer.errors import SummarizerError
from text_summarizer.generator import SummaryGenerator
from text_summarizer.graphing import build_graph, degree
from text_summarizer.logging_config import setup_logging
from text_summarizer.models import DEFAULT_MODEL_ID, ModelInfo, get_model, models_by_tier
from text_summarizer.preprocessing import preprocess_text
from text_summarizer.scoring import textrank_scores
from text_summarizer.session import ModelSession
from text_summarizer.similarity import vector_similarity_matrix
from text_summarizer.summarize import rank_text, select_top_indices

setup_logging(settings.log_level)


@st.cache_resource
def get_session() -> ModelSession:
    """One session per server process so a loaded encoder survives reruns."""
    return ModelSession(delay_scale=settings.delay_scale)


def draw_graph_visualization(sentences: List[Sentence], simM, scores: List[float], selected: List[int],
                             sim_threshold: float):
    """Sentence graph: node size follows rank score, selected sentences highlighted."""
    graph = build_graph(sentences, simM, threshold=sim_threshold)
    G = nx.Graph()
    for i in range(len(sentences)):
        G.add_node(i)
    for edge in graph.edges:
        G.add_edge(edge.i, edge.j, weight=edge.weight)

    fig, ax = plt.subplots(figsize=(10, 8))
    ax.set_title("Sentence Similarity Graph", fontsize=14, fontweight='bold')

    if len(G.nodes) > 0:
        pos = nx.spring_layout(G, k=2, iterations=50, seed=42)
        max_score = max(scores) if scores else 1.0
        sizes = [400 + 1200 * (scores[i] / max_score) for i in G.nodes()]
        colors = ['gold' if i in selected else 'lightblue' for i in G.nodes()]
        nx.draw_networkx_nodes(G, pos, ax=ax, node_color=colors, node_size=sizes, alpha=0.8)

        edges = G.edges(data=True)
        if edges:
            weights = [edge[2]['weight'] for edge in edges]
            max_weight = max(weights) if weights else 1
            edge_widths = [3 * (w / max_weight) for w in weights]
            nx.draw_networkx_edges(G, pos, ax=ax, width=edge_widths, alpha=0.6, edge_color='gray')

        labels = {i: f"S{i+1}" for i in G.nodes()}
        nx.draw_networkx_labels(G, pos, labels, ax=ax, font_size=10, font_weight='bold')

        if len(G.nodes) <= 10:
            edge_labels = {(u, v): f"{d['weight']:.2f}" for u, v, d in G.edges(data=True)}
            nx.draw_networkx_edge_labels(G, pos, edge_labels, ax=ax, font_size=8)

    ax.set_aspect('equal')
    ax.axis('off')
    plt.tight_layout()

    buf = io.BytesIO()
    plt.savefig(buf, format='png', dpi=150, bbox_inches='tight')
    buf.seek(0)
    plt.close(fig)
    return buf, graph


def create_sidebar_controls():
    """Model picker, sentence count and debug options."""
    st.sidebar.header("Model")
    options = []
    for tier, models in models_by_tier().items():
        options.extend((tier, m) for m in models)
    default_index = next((i for i, (_, m) in enumerate(options) if m.id == settings.default_model), 0)
    _, info = st.sidebar.selectbox(
        "Summarization model",
        options,
        index=default_index,
        format_func=lambda opt: f"{opt[1].name} ({opt[0]})",
    )
    show_model_info(info)

    st.sidebar.header("Parameters")
    sentence_count = st.sidebar.slider(
        "Summary sentences",
        min_value=MIN_SENTENCES,
        max_value=MAX_SENTENCES,
        value=settings.clamped_sentence_count,
        step=1,
    )
    seed = st.sidebar.number_input("Rewrite seed", min_value=0, value=settings.seed or 0, step=1,
                                   help="Fixes the phrasing chosen for the enhanced summary")

    st.sidebar.header("Debug Options")
    debug_mode = st.sidebar.checkbox("Enable Debug Mode", value=False, help="Show ranking details")
    threshold = st.sidebar.slider("Graph edge threshold", min_value=0.05, max_value=1.0,
                                  value=settings.similarity_threshold, step=0.05)
    return info, sentence_count, int(seed), debug_mode, threshold


def show_model_info(info: ModelInfo):
    with st.sidebar.expander("Model details", expanded=False):
        st.write(info.description)
        col1, col2 = st.columns(2)
        with col1:
            st.metric("Size", info.size)
            st.metric("Speed", info.speed)
        with col2:
            st.metric("Quality", info.quality)
            st.metric("Memory", info.memory)
        if info.warning:
            st.warning(info.warning)


def key_elements_frame(key_elements: KeyElements) -> pd.DataFrame:
    rows = []
    for kind, items in (("Theme", key_elements.themes), ("Entity", key_elements.entities),
                        ("Term", key_elements.terms)):
        for item in items:
            rows.append({"Kind": kind, "Text": item.text, "Relevance": "★" * item.relevance})
    return pd.DataFrame(rows)


def show_key_elements(key_elements: KeyElements):
    st.dataframe(key_elements_frame(key_elements), use_container_width=True)

    st.subheader("By Category")
    cols = st.columns(max(1, len(key_elements.categories)))
    for col, (category, items) in zip(cols, key_elements.categories.items()):
        with col:
            st.markdown(f"**{category.title()}**")
            for item in items:
                st.write(f"- {item.text}")

    if key_elements.key_points:
        st.subheader("Key Points")
        for point in key_elements.key_points:
            st.write(f"- {point}")


def rank_for_model(text: str, info: ModelInfo, session: ModelSession):
    """Sentences, similarity matrix and TextRank scores the way `info` computes them."""
    if not info.uses_ml:
        ranked = rank_text(text)
        return ranked.doc.sentences, ranked.simM, ranked.scores
    sentences = preprocess_text(text, PreprocessConfig()).sentences
    if not sentences:
        return sentences, [], []
    vectors = session.embed(info, [s.text for s in sentences])
    simM = vector_similarity_matrix(list(vectors), RankConfig())
    return sentences, simM, textrank_scores(simM)


def debug_pipeline(text: str, info: ModelInfo, session: ModelSession, sentence_count: int, sim_threshold: float):
    """Show every ranking step for `text`."""
    st.header("Step 1: Sentence Splitting")
    with st.expander("Sentences", expanded=True):
        with st.spinner("Splitting text..."):
            sentences, simM, scores = rank_for_model(text, info, session)
        st.success(f"Found {len(sentences)} sentences")

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Total Sentences", len(sentences))
        with col2:
            st.metric("Total Words", len(text.split()))
        with col3:
            st.metric("Similarity", "vector cosine" if info.uses_ml else "word overlap")

        sentences_data = [{
            "Sentence #": i+1,
            "Text": s.text[:80] + "..." if len(s.text) > 80 else s.text,
            "Tokens": ", ".join(s.tokens[:8]) + ("..." if len(s.tokens) > 8 else ""),
        } for i, s in enumerate(sentences)]
        st.dataframe(pd.DataFrame(sentences_data), use_container_width=True)

    if not sentences:
        st.warning("No sentences long enough to rank")
        return

    st.header("Step 2: Similarity Matrix")
    with st.expander("Similarity Details", expanded=True):
        n_sentences = len(simM)
        if n_sentences <= 50:
            labels = [f"S{i+1}" for i in range(n_sentences)]
            st.dataframe(pd.DataFrame(simM, columns=labels, index=labels).round(3), use_container_width=True)
        else:
            st.info(f"Matrix too large to display ({n_sentences}x{n_sentences} = {n_sentences**2:,} cells)")
        off_diagonal = [simM[i][j] for i in range(n_sentences) for j in range(n_sentences) if i != j]
        if off_diagonal:
            col1, col2, col3 = st.columns(3)
            with col1:
                st.metric("Min Similarity", f"{min(off_diagonal):.3f}")
            with col2:
                st.metric("Max Similarity", f"{max(off_diagonal):.3f}")
            with col3:
                st.metric("Mean Similarity", f"{np.mean(off_diagonal):.3f}")

    st.header("Step 3: TextRank Scores")
    with st.expander("Scoring and Selection", expanded=True):
        k = min(sentence_count, len(sentences))
        selected = select_top_indices(scores, k)
        scoring_data = [{
            "Sentence #": i+1,
            "Score": f"{scores[i]:.4f}",
            "Selected": "yes" if i in selected else "no",
            "Text": s.text,
        } for i, s in enumerate(sentences)]
        st.dataframe(pd.DataFrame(scoring_data), use_container_width=True)

    st.header("Step 4: Sentence Graph")
    with st.expander("Graph Visualization", expanded=True):
        if len(sentences) <= 50:
            try:
                with st.spinner("Generating graph visualization..."):
                    image, graph = draw_graph_visualization(sentences, simM, scores, selected, sim_threshold)
                st.image(image, caption="Node size follows TextRank score; selected sentences in gold",
                         use_container_width=True)
                col1, col2 = st.columns(2)
                with col1:
                    st.metric("Edges", len(graph.edges))
                with col2:
                    degrees = degree(graph)
                    st.metric("Max Degree", max(degrees) if degrees else 0)
            except Exception as e:
                st.error(f"Could not generate graph visualization: {str(e)}")
        else:
            st.info(f"Graph too large to visualize ({len(sentences)} nodes)")


def main():
    st.title("Text Summarizer")
    st.write("Paste text to get an extractive summary, an enhanced summary and its key elements")

    info, sentence_count, seed, debug_mode, threshold = create_sidebar_controls()
    text = st.text_area("Text to summarize", height=250)

    if st.button("Generate Summary", type="primary"):
        session = get_session()
        generator = SummaryGenerator(session=session, rng=random.Random(seed))
        try:
            with st.spinner(f"Summarizing with {info.name}..."):
                result = generator.generate_all_summaries(text, info.id, sentence_count)
        except SummarizerError as e:
            st.error(str(e))
            return
        except Exception as e:
            st.error(f"Error generating summary: {str(e)}")
            st.exception(e)
            return

        basic_tab, enhanced_tab, elements_tab = st.tabs(["Summary", "Enhanced Summary", "Key Elements"])
        with basic_tab:
            st.text_area("Extractive summary", result.basic_summary, height=150, disabled=True)
        with enhanced_tab:
            st.text_area("Enhanced summary", result.enhanced_summary, height=150, disabled=True)
        with elements_tab:
            show_key_elements(result.key_elements)

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Original Length", len(text.split()))
        with col2:
            st.metric("Summary Length", len(result.basic_summary.split()))
        with col3:
            st.metric("Processing Time", f"{result.elapsed_ms / 1000:.2f}s")

        if debug_mode:
            st.markdown("---")
            st.title("Pipeline Debug Mode")
            try:
                debug_pipeline(text, get_model(result.model_id or DEFAULT_MODEL_ID), session,
                               sentence_count, threshold)
            except SummarizerError as e:
                st.error(str(e))


if __name__ == "__main__":
    main()
