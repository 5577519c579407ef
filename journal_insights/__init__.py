"""Journal Insights - generates language-model insights from user journals stored in Firestore."""
