from .database_manage import TABLES, create_all_tables, export_table
