from signout.text_cleaning.emr_cleaner import clean_text_for_emr

__all__ = ["clean_text_for_emr"]
