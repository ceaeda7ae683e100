"""
Framework bindings for milkytables.

Each binding only fixes the renderer handle type ``L`` of ``Table[V, L]`` and
``Column[V, L]``; all behavior stays in milkytables.core.table. Bindings do not
import their frameworks, so installing milkytables never pulls in a UI stack.

- streamlit: cell renderers are callables that draw a value (e.g., ``st.metric``-style
  wrappers or ``st.write``).
- text: cell renderers are formatters returning a display string.
"""

from __future__ import annotations
