"""Domain layer for expensetrack application.

Services live in their own modules (``expense_report``, ``expense``,
``attachment``, ``user``) and are imported from there; this package stays
free of eager imports because the database layer imports
``domain.entities``.
"""
