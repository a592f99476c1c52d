"""
cssmodulize: move a JSX code base from global CSS classes to CSS modules.

The package rewrites ``className`` values so that every class defined by a
stylesheet imported as a side effect (``import './card.scss'``) is referenced
through a CSS-module object instead (``styles.card``), renames the stylesheet
to ``*.module.scss`` and leaves every other class string untouched.

The code is organised into several modules:

* ``ast`` – dataclasses for the small subset of JavaScript expressions that
  can appear as a class attribute value.
* ``parser`` – tree-sitter backed reading of script files into that AST and
  lookup of style imports, merge-utility imports and class attributes.
* ``rewrite`` – the className rewrite engine: token splitting, template
  boundary resolution, the recursive expression dispatcher and the merge
  call synthesizer.
* ``codegen`` – printing rewritten expressions back to JavaScript.
* ``styles`` – stylesheet naming, global selector preservation and class map
  extraction (libsass + cssutils).
* ``migration`` – the per-file pipeline tying the pieces together.
* ``cli`` – the ``cssmodulize`` command.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
