"""Top-level package for the Finance Tracker.

The primary modules are:

* ``operations`` – user-scoped CRUD requests returning ``Result`` values
* ``analytics`` – pure aggregations over transactions, budgets and assets
* ``forms`` / ``list_state`` – form and list-view state, free of Streamlit
* ``auth`` – email/password sign-up, sign-in and sign-out
* ``dashboard`` – the Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run finance_tracker/Home.py
```

or ``python run_dashboard.py`` from the project root.
"""

__version__ = "0.1.0"
