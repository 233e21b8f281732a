from .aggregation import average_salary_by_year_role, role_series

__all__ = ["average_salary_by_year_role", "role_series"]
