"""Seed database with demo task letters."""
from app.database import Base, SessionLocal, engine
from app.domain_errors import DUPLICATE_REGISTER_NUMBER, DomainError
from app.schemas import TaskLetterCreate
from app.use_cases.task_letters import create_task_letter_use_case
from datetime import date
from decimal import Decimal

DEMO_LETTERS = [
    {
        'register_number': '090/ST/BPS/I/2026',
        'title': 'Surat Tugas Pendataan Lapangan',
        'recipient_name': 'Budi Santoso',
        'recipient_position': 'Statistisi Ahli Muda',
        'destination_place': 'Kabupaten Sleman',
        'purpose': 'Pendampingan pendataan survei rumah tangga',
        'start_date': date(2026, 1, 12),
        'end_date': date(2026, 1, 15),
        'transportation': 'Kendaraan dinas',
        'advance_money': Decimal('1500000.00'),
        'signatory_name': 'Dr. Siti Rahmawati',
        'signatory_position': 'Kepala Bagian Umum',
        'creation_place': 'Yogyakarta',
        'creation_date': date(2026, 1, 8),
    },
    {
        'register_number': '091/ST/BPS/I/2026',
        'title': 'Surat Tugas Rapat Koordinasi',
        'recipient_name': 'Ani Wijaya',
        'recipient_position': 'Analis Kebijakan',
        'destination_place': 'Jakarta',
        'purpose': 'Rapat koordinasi perencanaan kegiatan tahunan',
        'start_date': date(2026, 1, 20),
        'end_date': date(2026, 1, 22),
        'transportation': 'Pesawat udara',
        'advance_money': Decimal('4250000.00'),
        'signatory_name': 'Dr. Siti Rahmawati',
        'signatory_position': 'Kepala Bagian Umum',
        'creation_place': 'Yogyakarta',
        'creation_date': date(2026, 1, 14),
    },
]


def seed():
    """Seed database with demo data."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        for letter_data in DEMO_LETTERS:
            try:
                letter = create_task_letter_use_case(db=db, payload=TaskLetterCreate(**letter_data))
            except DomainError as exc:
                if exc.code != DUPLICATE_REGISTER_NUMBER:
                    raise
                print(f"   = {letter_data['register_number']} already present, skipped")
                continue
            print(f"   + {letter.register_number} (id={letter.id})")

        print("✅ Database seeded successfully!")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
